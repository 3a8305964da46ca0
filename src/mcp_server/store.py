"""In-memory Record Store.

The store is the only component that mutates record state. Each record type
has one collection, created at construction time. Records carry an ``id``
plus ``createdAt``/``updatedAt`` timestamps managed by the store.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from shared.exceptions import InvalidType, NotFound
from shared.logging import get_logger
from shared.models import RecordType, utcnow

logger = get_logger(__name__)

Record = dict[str, Any]
Clock = Callable[[], datetime]

# Fields owned by the store; callers can never overwrite them.
MANAGED_FIELDS = ("id", "createdAt", "updatedAt")


SAMPLE_DATA: dict[RecordType, list[Record]] = {
    RecordType.USER: [
        {"id": "1", "name": "John Doe", "email": "john@example.com", "status": "active"},
        {"id": "2", "name": "Jane Smith", "email": "jane@example.com", "status": "active"},
        {"id": "3", "name": "Bob Johnson", "email": "bob@example.com", "status": "inactive"},
    ],
    RecordType.PRODUCT: [
        {"id": "1", "name": "Laptop", "price": 999.99, "category": "Electronics", "stock": 50},
        {"id": "2", "name": "Smartphone", "price": 699.99, "category": "Electronics", "stock": 100},
        {"id": "3", "name": "Desk Chair", "price": 249.99, "category": "Furniture", "stock": 25},
    ],
    RecordType.ORDER: [
        {"id": "1", "userId": "1", "productId": "1", "quantity": 1, "total": 999.99, "status": "completed"},
        {"id": "2", "userId": "2", "productId": "2", "quantity": 2, "total": 1399.98, "status": "pending"},
        {"id": "3", "userId": "1", "productId": "3", "quantity": 1, "total": 249.99, "status": "shipped"},
    ],
}


class RecordStore:
    """
    Typed in-memory collections keyed by record id.

    Every public operation runs under a single lock and returns copies,
    so no caller can observe or cause a partially applied change.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utcnow
        self._collections: dict[RecordType, dict[str, Record]] = {
            record_type: {} for record_type in RecordType
        }
        self._lock = threading.RLock()

    def now(self) -> datetime:
        """Current time according to the store's clock."""
        return self._clock()

    def _collection(self, record_type: str | RecordType) -> tuple[RecordType, dict[str, Record]]:
        try:
            key = RecordType(record_type)
        except ValueError:
            raise InvalidType(str(record_type)) from None
        return key, self._collections[key]

    def seed_sample_data(self) -> None:
        """Load the fixed set of sample records into every collection."""
        with self._lock:
            now = self.now()
            for record_type, records in SAMPLE_DATA.items():
                collection = self._collections[record_type]
                for record in records:
                    collection[record["id"]] = {**record, "createdAt": now, "updatedAt": now}

        logger.info(
            "Sample data loaded",
            counts={t.value: len(c) for t, c in self._collections.items()}
        )

    def create(self, record_type: str, fields: dict[str, Any]) -> Record:
        """
        Create a record with a generated id and fresh timestamps.

        Args:
            record_type: Record type token
            fields: Caller-supplied fields; managed fields are ignored

        Returns:
            The stored record

        Raises:
            InvalidType: If the record type is unknown
        """
        with self._lock:
            key, collection = self._collection(record_type)
            now = self.now()
            record_id = str(uuid.uuid4())
            record = {
                **fields,
                "id": record_id,
                "createdAt": now,
                "updatedAt": now,
            }
            collection[record_id] = record

        logger.debug("Record created", type=key.value, id=record_id)
        return dict(record)

    def read(self, record_type: str, record_id: str) -> Optional[Record]:
        """Return a record, or None if the id is absent."""
        with self._lock:
            _, collection = self._collection(record_type)
            record = collection.get(record_id)
            return dict(record) if record is not None else None

    def update(self, record_type: str, record_id: str, fields: dict[str, Any]) -> Record:
        """
        Shallow-merge fields over an existing record.

        Nested values are replaced wholesale. ``id`` and ``createdAt`` are
        kept even when present in ``fields``; ``updatedAt`` is refreshed.

        Raises:
            InvalidType: If the record type is unknown
            NotFound: If the id is absent
        """
        with self._lock:
            key, collection = self._collection(record_type)
            existing = collection.get(record_id)
            if existing is None:
                raise NotFound(key.value, record_id)

            updated = dict(existing)
            for field, value in fields.items():
                if field not in MANAGED_FIELDS:
                    updated[field] = value
            updated["updatedAt"] = self.now()
            collection[record_id] = updated

        logger.debug("Record updated", type=key.value, id=record_id, fields=sorted(fields))
        return dict(updated)

    def delete(self, record_type: str, record_id: str) -> dict[str, Any]:
        """
        Remove a record immediately.

        Raises:
            InvalidType: If the record type is unknown
            NotFound: If the id is absent
        """
        with self._lock:
            key, collection = self._collection(record_type)
            if record_id not in collection:
                raise NotFound(key.value, record_id)
            del collection[record_id]

        logger.debug("Record deleted", type=key.value, id=record_id)
        return {"id": record_id, "deleted": True}

    def list(self, record_type: str) -> list[Record]:
        """Return every record of a type in insertion order."""
        with self._lock:
            _, collection = self._collection(record_type)
            return [dict(record) for record in collection.values()]

    def search(self, record_type: str, query: Optional[str] = None) -> list[Record]:
        """
        Case-insensitive substring search over all field values.

        An empty query returns the full listing.
        """
        records = self.list(record_type)
        if not query:
            return records

        needle = query.lower()
        return [
            record for record in records
            if any(needle in str(value).lower() for value in record.values())
        ]

    def stats(self, record_type: str) -> dict[str, Any]:
        """
        Summarize a collection.

        ``createdToday`` compares UTC calendar dates of ``createdAt`` with
        the store clock's current UTC date.
        """
        with self._lock:
            key, collection = self._collection(record_type)
            records = list(collection.values())
            today = self.now().date()

        return {
            "type": key.value,
            "total": len(records),
            "createdToday": sum(1 for r in records if r["createdAt"].date() == today),
            "lastUpdated": max((r["updatedAt"] for r in records), default=None),
        }

    def clear(self, record_type: Optional[str] = None) -> None:
        """Empty one collection, or all of them when no type is given."""
        with self._lock:
            if record_type is None:
                for collection in self._collections.values():
                    collection.clear()
            else:
                self._collection(record_type)[1].clear()

        logger.warning("Record store cleared", type=record_type or "all")


def create_store(seed: bool = True, clock: Optional[Clock] = None) -> RecordStore:
    """Build a record store, optionally seeded with sample data."""
    store = RecordStore(clock=clock)
    if seed:
        store.seed_sample_data()
    return store
