"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """riskbank server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: there is no auth layer in front of the record store.
    riskbank_host: str = "127.0.0.1"
    riskbank_port: int = 8001
    riskbank_log_level: str = "info"
    # Must be set true to bind a non-loopback host.
    riskbank_allow_insecure_bind: bool = False

    # Storage
    db_path: str = "~/.riskbank/records.db"
    storage_key: str = "patients_demo"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
