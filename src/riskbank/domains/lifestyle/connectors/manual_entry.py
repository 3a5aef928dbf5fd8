"""Manual entry intake — one interactively entered record per submission.

Submissions pass the hard validation gate, then the same normalize + score
pipeline as bulk import, and are prepended to the stored collection.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from riskbank.core.storage.repository import RecordRepository
from riskbank.domains.lifestyle.domain_logic.normalizer import normalize_record, validate_form
from riskbank.domains.lifestyle.domain_logic.record_models import Record
from riskbank.domains.lifestyle.domain_logic.scoring_engine import score_record

logger = logging.getLogger(__name__)


def build_record(form: Mapping[str, Any]) -> Record:
    """Validate a submission and return the scored canonical record.

    Raises:
        RecordValidationError: If the submission fails the form gate.
    """
    validate_form(form)
    return score_record(normalize_record(form))


class ManualEntryIntake:
    """Stores validated manual submissions in the record repository."""

    def __init__(self, repository: RecordRepository) -> None:
        self._repo = repository

    def submit(self, form: Mapping[str, Any]) -> Record:
        """Validate, score and store one submission.

        Raises:
            RecordValidationError: Nothing is stored when this is raised.
        """
        record = build_record(form)
        self._repo.append(record)
        logger.info("Manual entry saved with estimated risk %d", record.risk)
        return record
