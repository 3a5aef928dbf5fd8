"""riskbank server entry point — ``python -m riskbank.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from riskbank.core.config.settings import Settings, get_settings
from riskbank.core.server.app import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind(settings: Settings) -> None:
    """Refuse a non-loopback bind unless explicitly allowed.

    The record store holds personal data and has no auth layer in front of it.

    Raises:
        RuntimeError: If ``riskbank_host`` is not loopback and
            ``riskbank_allow_insecure_bind`` is false.
    """
    if settings.riskbank_allow_insecure_bind or _is_loopback_host(settings.riskbank_host):
        return
    raise RuntimeError(
        f"Refusing to bind riskbank to {settings.riskbank_host!r}: the record store "
        "has no auth layer. Set RISKBANK_ALLOW_INSECURE_BIND=true to override (unsafe)."
    )


def run() -> None:
    """Start the riskbank MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.riskbank_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    check_bind(settings)
    if settings.riskbank_allow_insecure_bind and not _is_loopback_host(settings.riskbank_host):
        logger.warning("Serving records on non-loopback host %s", settings.riskbank_host)
    logger.info(
        "Starting riskbank on %s:%d (records in %s under key %r)",
        settings.riskbank_host,
        settings.riskbank_port,
        settings.db_path,
        settings.storage_key,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.riskbank_host,
        port=settings.riskbank_port,
    )


if __name__ == "__main__":
    run()
