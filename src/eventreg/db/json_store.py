from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional

from eventreg import config
from eventreg.db.base import Record, Store

logger = logging.getLogger(__name__)


class JsonFileStore(Store):
    """
    One pretty-printed JSON array document per collection.
    Every load reads the whole file, every save overwrites it in one write.
    """

    backend = "json"

    def __init__(self, data_dir: str = ".", files: Optional[Dict[str, str]] = None):
        self.data_dir = data_dir
        self.files = {name: config.collection_file(name) for name in config.COLLECTIONS}
        if files:
            self.files.update(files)

    def path_for(self, collection: str) -> str:
        filename = self.files.get(collection) or config.collection_file(collection)
        return os.path.join(self.data_dir, filename)

    def open(self) -> None:
        # Create empty array documents on first run
        os.makedirs(self.data_dir, exist_ok=True)
        for collection in self.files:
            path = self.path_for(collection)
            if not os.path.exists(path):
                logger.info("Creating empty %s document at %s", collection, path)
                self.save(collection, [])

    def load(self, collection: str) -> List[Record]:
        path = self.path_for(collection)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.error("Error loading %s from %s: %s", collection, path, e)
            return []
        if not isinstance(data, list):
            logger.error("Error loading %s from %s: document is not an array", collection, path)
            return []
        return data

    def save(self, collection: str, records: List[Record]) -> bool:
        path = self.path_for(collection)
        try:
            payload = json.dumps(records, indent=2)
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving %s to %s: %s", collection, path, e)
            return False

    def ping(self) -> bool:
        return os.path.isdir(self.data_dir) and os.access(self.data_dir, os.W_OK)
