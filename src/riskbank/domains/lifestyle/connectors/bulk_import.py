"""Bulk import/export intake — whole-collection JSON documents.

Import is best-effort sanitizing: elements are normalized and re-scored but
never run through the manual-entry validation gate.
"""

from __future__ import annotations

import logging

from riskbank.core.storage.repository import RecordRepository
from riskbank.domains.lifestyle.domain_logic.record_codec import (
    export_collection,
    import_collection,
)

logger = logging.getLogger(__name__)


class BulkImportIntake:
    """Replaces or dumps the stored collection as a JSON document."""

    def __init__(self, repository: RecordRepository) -> None:
        self._repo = repository

    def import_document(self, document: str | bytes) -> int:
        """Replace the stored collection with the records of ``document``.

        Returns:
            Number of records imported.

        Raises:
            ImportParseError: If the document is rejected; the stored
                collection is left untouched.
        """
        records = import_collection(document)
        self._repo.replace(records)
        logger.info("%d records imported", len(records))
        return len(records)

    def export_document(self) -> str:
        """Serialize the stored collection (2-space indented JSON array)."""
        return export_collection(self._repo.load())
