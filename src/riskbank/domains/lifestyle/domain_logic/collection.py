"""Pure transforms over an explicit record collection (newest first)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from riskbank.domains.lifestyle.domain_logic.record_models import Record


def prepend_record(collection: Sequence[Record], record: Record) -> list[Record]:
    """Return a new collection with ``record`` at the front."""
    return [record, *collection]


def replace_collection(collection: Sequence[Record], records: Iterable[Record]) -> list[Record]:
    """Return ``records`` as the new collection; prior contents are discarded, not merged."""
    return list(records)
