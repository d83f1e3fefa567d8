"""Store interface.

Handlers and services only talk to a ``Store``. Backends implement the two
whole-collection primitives (``load`` / ``save``); the key-value helpers
(``list`` / ``get`` / ``put``) are built on top of them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

Record = Dict[str, Any]


def next_id(records: Iterable[Record]) -> int:
    """max(existing ids) + 1, or 1 for an empty collection."""
    ids = [r.get("id") for r in records if isinstance(r.get("id"), int)]
    return max(ids) + 1 if ids else 1


class Store(ABC):
    backend = "abstract"

    @abstractmethod
    def load(self, collection: str) -> List[Record]:
        """Return the whole collection; empty list on missing or unreadable data."""
        ...

    @abstractmethod
    def save(self, collection: str, records: List[Record]) -> bool:
        """Overwrite the whole collection. Returns False on failure."""
        ...

    def open(self) -> None:
        """Prepare storage before serving requests."""

    def close(self) -> None:
        """Release resources held by the backend."""

    def ping(self) -> bool:
        return True

    # --- key-value helpers ---

    def list(self, collection: str) -> List[Record]:
        return self.load(collection)

    def get(self, collection: str, record_id: int) -> Optional[Record]:
        for rec in self.load(collection):
            if rec.get("id") == record_id:
                return rec
        return None

    def put(self, collection: str, record: Record) -> bool:
        """Insert or replace ``record`` by its ``id``."""
        records = self.load(collection)
        for i, rec in enumerate(records):
            if rec.get("id") == record.get("id"):
                records[i] = record
                break
        else:
            records.append(record)
        return self.save(collection, records)
