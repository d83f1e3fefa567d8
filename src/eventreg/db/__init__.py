from __future__ import annotations

from eventreg import config
from eventreg.db.base import Record, Store, next_id
from eventreg.db.json_store import JsonFileStore

__all__ = ["Record", "Store", "JsonFileStore", "current_store", "get_store", "next_id"]


def get_store(backend: str | None = None) -> Store:
    """Build the configured store (STORE_BACKEND=json|mongo)."""
    backend = (backend or config.STORE_BACKEND or "json").lower()
    if backend == "json":
        return JsonFileStore(config.DATA_DIR)
    if backend == "mongo":
        # Lazy import; pymongo is only needed for this backend
        from eventreg.db.mongo import MongoStore
        return MongoStore(config.MONGODB_URI, config.MONGO_DB)
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def current_store() -> Store:
    """The store injected into the running Flask app."""
    from flask import current_app
    return current_app.extensions["eventreg.store"]
