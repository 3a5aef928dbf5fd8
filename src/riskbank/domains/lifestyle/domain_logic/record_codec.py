"""JSON import/export of record collections.

Both directions go through the normalizer and the scoring engine, so an
imported record is stored exactly as a manually entered one would be. Any
``risk`` in an imported document is discarded and recomputed.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from riskbank.domains.lifestyle.domain_logic.normalizer import normalize_record
from riskbank.domains.lifestyle.domain_logic.record_models import Record
from riskbank.domains.lifestyle.domain_logic.scoring_engine import score_record

logger = logging.getLogger(__name__)

EXPORT_FILENAME_PREFIX = "patients_demo"


class ImportParseError(ValueError):
    """Raised when an import document is not a JSON array."""


def export_collection(records: Sequence[Record]) -> str:
    """Serialize records as a pretty-printed (2-space) JSON array."""
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def export_filename(now: datetime | None = None) -> str:
    """Suggested download name, e.g. ``patients_demo_2026-02-01T12-00-00-000000+00-00.json``."""
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return f"{EXPORT_FILENAME_PREFIX}_{stamp.replace(':', '-').replace('.', '-')}.json"


def _rebuild(items: list[Any]) -> list[Record]:
    return [score_record(normalize_record(item)) for item in items]


def import_collection(document: str | bytes) -> list[Record]:
    """Parse an untrusted import document into scored canonical records.

    Args:
        document: UTF-8 JSON text whose top level must be an array.

    Returns:
        One record per array element, in document order.

    Raises:
        ImportParseError: If the document is not valid JSON or its top level
            is not an array. Nothing is partially applied.
    """
    try:
        parsed = json.loads(document)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and over-long
        # integer literals.
        raise ImportParseError(f"Invalid JSON document: {exc}") from exc
    if not isinstance(parsed, list):
        raise ImportParseError(
            f"Invalid format: expected a JSON array, got {type(parsed).__name__}"
        )
    records = _rebuild(parsed)
    logger.info("Parsed import document: %d records", len(records))
    return records


def encode_stored_collection(records: Sequence[Record]) -> str:
    """Compact serialization for the persistence slot."""
    return json.dumps(
        [record.to_dict() for record in records],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def decode_stored_collection(text: str | None) -> list[Record]:
    """Read the persistence slot; absent or corrupt contents mean an empty collection."""
    if not text:
        return []
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.warning("Stored record collection is not valid JSON; treating as empty")
        return []
    if not isinstance(parsed, list):
        logger.warning("Stored record collection is not an array; treating as empty")
        return []
    return _rebuild(parsed)
