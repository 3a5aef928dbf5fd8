"""Single-slot key/value persistence over the record database."""

from __future__ import annotations

import logging

from riskbank.core.storage.database import RecordDatabase

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "patients_demo"


class RecordStore:
    """Durable slot holding one serialized value under a fixed key.

    The store knows nothing about records; callers own (de)serialization.

    Usage::

        store = RecordStore(db, key="patients_demo")
        store.write("[]")
        store.read()  # "[]"
    """

    def __init__(self, database: RecordDatabase, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._db = database
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> str | None:
        """Return the stored text, or None if the slot is empty."""
        row = self._db.connection.execute(
            "SELECT value FROM kv_store WHERE key = ?", (self._key,)
        ).fetchone()
        return row[0] if row is not None else None

    def write(self, value: str) -> None:
        """Overwrite the slot in a single commit."""
        conn = self._db.connection
        conn.execute(
            """INSERT INTO kv_store (key, value, updated_at)
               VALUES (?, ?, datetime('now'))
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (self._key, value),
        )
        conn.commit()
        logger.debug("Wrote %d bytes to slot %r", len(value), self._key)

    def clear(self) -> bool:
        """Empty the slot. Returns True if something was removed."""
        conn = self._db.connection
        cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (self._key,))
        conn.commit()
        return cursor.rowcount > 0
