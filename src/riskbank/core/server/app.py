"""riskbank MCP server — application factory.

This module provides:
- create_app() for testability (tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from riskbank.core.config.settings import get_settings
from riskbank.core.storage.database import RecordDatabase
from riskbank.core.storage.kv_store import RecordStore
from riskbank.core.storage.repository import RecordRepository
from riskbank.domains.lifestyle.tools.record_tools import register_record_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "riskbank"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    repository_override: RecordRepository | None = None,
) -> FastMCP:
    """Create and configure the riskbank MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Opens the SQLite record store (unless a repository is injected)
    3. Registers the health check and record tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Lifestyle risk record bank. Estimates a 0-100 non-clinical risk "
            "score from lifestyle, environmental and clinical inputs, stores "
            "records locally, and reports dashboard statistics. Not medical advice."
        ),
    )

    # --- Initialize storage ---
    if repository_override is not None:
        repository = repository_override
    else:
        record_db = RecordDatabase(settings.db_path)
        record_db.initialize()
        repository = RecordRepository(RecordStore(record_db, key=settings.storage_key))
        logger.info(
            "Record store initialized: %s (key %r)",
            settings.db_path,
            settings.storage_key,
        )

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "records_stored": repository.count(),
        }

    register_record_tools(server, repository)
    logger.info("Record tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this attribute is accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
