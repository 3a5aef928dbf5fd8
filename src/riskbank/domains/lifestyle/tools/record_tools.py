"""MCP tools for lifestyle risk records.

Manual entry, bulk import/export, and the dashboard read path. Every tool
returns a JSON document; none of them render markup.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from riskbank.domains.lifestyle.connectors.bulk_import import BulkImportIntake
from riskbank.domains.lifestyle.connectors.manual_entry import ManualEntryIntake
from riskbank.domains.lifestyle.domain_logic.aggregator import aggregate, classify_risk
from riskbank.domains.lifestyle.domain_logic.normalizer import (
    RecordValidationError,
    normalize_record,
)
from riskbank.domains.lifestyle.domain_logic.record_codec import (
    ImportParseError,
    export_filename,
)
from riskbank.domains.lifestyle.domain_logic.scoring_engine import score_breakdown, score_record

if TYPE_CHECKING:
    from riskbank.core.storage.repository import RecordRepository

logger = logging.getLogger(__name__)

CLEAR_CONFIRMATION = "CLEAR_ALL"


def register_record_tools(
    mcp: FastMCP,
    repository: RecordRepository,
) -> None:
    """Register record entry, import/export and dashboard tools on the MCP server."""
    manual_intake = ManualEntryIntake(repository)
    bulk_intake = BulkImportIntake(repository)

    @mcp.tool
    async def submit_record(
        ctx: Context,
        entry: dict[str, Any],
    ) -> str:
        """Validate, score and store one manually entered record.

        Args:
            entry: Form fields: fullname, age, consent, genetics, diet,
                environment, smoking, alcohol, activity, sleep, height,
                weight, stress, conditions, sbp, chol, glucose, fruits,
                vegetables, noise, work. Name, age and consent are required.
        """
        try:
            record = manual_intake.submit(entry)
        except RecordValidationError as exc:
            return json.dumps({"status": "rejected", "message": str(exc)})

        tier = classify_risk(record.risk)
        return json.dumps({
            "status": "saved",
            "message": f"Saved — estimated risk: {record.risk}",
            "risk": record.risk,
            "tier": tier.value,
            "recommendation": tier.recommendation,
            "record": record.to_dict(),
        }, ensure_ascii=False)

    @mcp.tool
    async def estimate_risk(
        ctx: Context,
        entry: dict[str, Any],
    ) -> str:
        """Score a record without storing it, with per-factor contributions.

        Args:
            entry: Same fields as submit_record. No validation gate is applied.
        """
        record = score_record(normalize_record(entry))
        tier = classify_risk(record.risk)
        return json.dumps({
            "status": "ok",
            "risk": record.risk,
            "tier": tier.value,
            "recommendation": tier.recommendation,
            "contributions": score_breakdown(record),
        })

    @mcp.tool
    async def import_records(
        ctx: Context,
        document: str,
    ) -> str:
        """Replace all stored records with the contents of a JSON export.

        Every record is re-normalized and re-scored; any supplied risk is
        ignored. On a malformed document nothing is changed.

        Args:
            document: JSON text whose top level is an array of records.
        """
        try:
            count = bulk_intake.import_document(document)
        except ImportParseError as exc:
            logger.warning("Import rejected: %s", exc)
            return json.dumps({"status": "error", "message": f"Import failed: {exc}"})
        return json.dumps({
            "status": "imported",
            "count": count,
            "message": f"{count} records imported.",
        })

    @mcp.tool
    async def export_records(ctx: Context) -> str:
        """Export all stored records as a pretty-printed JSON document."""
        document = bulk_intake.export_document()
        return json.dumps({
            "status": "ok",
            "filename": export_filename(),
            "document": document,
        }, ensure_ascii=False)

    @mcp.tool
    async def dashboard_summary(ctx: Context) -> str:
        """Entry count, average risk, and a tiered row per stored record."""
        records = repository.load()
        summary = aggregate(records)
        rows = [
            {
                "fullname": record.fullname,
                "age": record.age,
                "risk": record.risk,
                "tier": tier.value,
                "recommendation": tier.recommendation,
            }
            for record, tier in zip(records, summary.per_record_tier)
        ]
        payload = summary.to_dict()
        payload["status"] = "ok" if records else "empty"
        payload["entries"] = rows
        return json.dumps(payload, indent=2, ensure_ascii=False)

    @mcp.tool
    async def list_records(
        ctx: Context,
        limit: int = 10,
    ) -> str:
        """List stored records, newest first.

        Args:
            limit: Maximum number of records to return.
        """
        records = repository.load()
        return json.dumps({
            "status": "ok",
            "total": len(records),
            "count": min(len(records), max(limit, 0)),
            "records": [record.to_dict() for record in records[:max(limit, 0)]],
        }, indent=2, ensure_ascii=False)

    @mcp.tool
    async def clear_records(
        ctx: Context,
        confirm: str = "",
    ) -> str:
        """Permanently delete ALL stored records.

        Args:
            confirm: Must be exactly 'CLEAR_ALL' to proceed. Safety gate.
        """
        if confirm != CLEAR_CONFIRMATION:
            return json.dumps({
                "status": "cancelled",
                "message": (
                    "To delete all records, call this tool with "
                    f"confirm='{CLEAR_CONFIRMATION}'. This action cannot be undone."
                ),
            })
        count = repository.clear()
        return json.dumps({
            "status": "cleared",
            "records_deleted": count,
        })
