from __future__ import annotations

import logging
from typing import List, Optional

from pymongo import ASCENDING, MongoClient
try:
    # Optional, matches Atlas “Stable API v1” example (safe to omit if unavailable)
    from pymongo.server_api import ServerApi  # type: ignore
    _SERVER_API = ServerApi("1")
except Exception:  # older pymongo
    _SERVER_API = None  # type: ignore

from eventreg import config
from eventreg.db.base import Record, Store

logger = logging.getLogger(__name__)

INDEXES = {
    config.EVENTS: [[("id", ASCENDING)]],
    config.REGISTRATIONS: [[("id", ASCENDING)], [("eventId", ASCENDING), ("email", ASCENDING)]],
}


class MongoStore(Store):
    """
    One MongoDB collection per record type. ``save`` replaces the collection
    contents wholesale so behaviour matches the JSON file backend.
    """

    backend = "mongo"

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None,
                 client: Optional[MongoClient] = None):
        self._uri = uri or config.MONGODB_URI
        self._db_name = db_name or config.MONGO_DB
        self._client = client

    def get_client(self) -> MongoClient:
        if self._client is not None:
            return self._client
        if not self._uri:
            raise RuntimeError("MONGODB_URI is not set")
        kwargs = {"serverSelectionTimeoutMS": 5000}
        if _SERVER_API is not None:
            kwargs["server_api"] = _SERVER_API  # type: ignore
        self._client = MongoClient(self._uri, **kwargs)
        return self._client

    def get_db(self):
        return self.get_client()[self._db_name]

    def get_collection(self, name: str):
        return self.get_db()[name]

    def open(self) -> None:
        """
        Safe to call on startup; creates the lookup indexes if they don’t exist.
        """
        try:
            db = self.get_db()
        except Exception as e:
            logger.warning("[ensure_indexes] skipped: %s", e)
            return
        for coll, index_list in INDEXES.items():
            for keys in index_list:
                try:
                    db[coll].create_index(keys)
                except Exception as e:
                    logger.warning("index create failed for %s: %s", coll, e)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def ping(self) -> bool:
        try:
            self.get_client().admin.command("ping")
            return True
        except Exception as e:
            logger.error("Mongo ping failed: %s", e)
            return False

    def load(self, collection: str) -> List[Record]:
        try:
            cursor = self.get_collection(collection).find({}, {"_id": 0}).sort("_pos", ASCENDING)
            docs = list(cursor)
        except Exception as e:
            logger.error("Error loading %s: %s", collection, e)
            return []
        for doc in docs:
            doc.pop("_pos", None)
        return docs

    def save(self, collection: str, records: List[Record]) -> bool:
        # _pos keeps storage order stable across reads
        docs = [dict(rec, _pos=i) for i, rec in enumerate(records)]
        try:
            coll = self.get_collection(collection)
            coll.delete_many({})
            if docs:
                coll.insert_many(docs)
            return True
        except Exception as e:
            logger.error("Error saving %s: %s", collection, e)
            return False
