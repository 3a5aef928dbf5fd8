"""Record repository — the only mutable view of the stored collection.

The repository mediates between the pure collection transforms and the
persistence slot. Every mutation is a read-modify-write under one lock, and
lands in the slot with one commit, so readers observe either the state before
or after an operation, never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from riskbank.core.storage.kv_store import RecordStore
from riskbank.domains.lifestyle.domain_logic.collection import (
    prepend_record,
    replace_collection,
)
from riskbank.domains.lifestyle.domain_logic.record_codec import (
    decode_stored_collection,
    encode_stored_collection,
)
from riskbank.domains.lifestyle.domain_logic.record_models import Record

logger = logging.getLogger(__name__)


class RecordRepository:
    """Load, append to, replace and clear the persisted record collection.

    Usage::

        db = RecordDatabase(":memory:")
        db.initialize()
        repo = RecordRepository(RecordStore(db))

        repo.append(record)
        records = repo.load()  # newest first
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._write_lock = threading.Lock()

    def load(self) -> list[Record]:
        """Return the stored collection, newest first (empty if absent or corrupt)."""
        return decode_stored_collection(self._store.read())

    def count(self) -> int:
        return len(self.load())

    def append(self, record: Record) -> list[Record]:
        """Prepend one scored record and persist. Returns the new collection."""
        with self._write_lock:
            collection = prepend_record(self.load(), record)
            self._store.write(encode_stored_collection(collection))
        logger.info("Stored record (risk=%d); collection size %d", record.risk, len(collection))
        return collection

    def replace(self, records: Iterable[Record]) -> list[Record]:
        """Replace the whole collection and persist. Returns the new collection."""
        with self._write_lock:
            collection = replace_collection(self.load(), records)
            self._store.write(encode_stored_collection(collection))
        logger.info("Replaced record collection: %d records", len(collection))
        return collection

    def clear(self) -> int:
        """Remove every stored record. Returns how many were removed."""
        with self._write_lock:
            count = len(self.load())
            self._store.clear()
        logger.warning("Cleared record collection: %d records removed", count)
        return count
