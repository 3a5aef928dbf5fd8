"""Shared test fixtures for riskbank tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))


# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DB_PATH", str(tmp_path / "records.db"))
    monkeypatch.setenv("STORAGE_KEY", "patients_demo")


# ---------------------------------------------------------------------------
# Sample inputs
# ---------------------------------------------------------------------------

def make_form(**overrides: Any) -> dict[str, Any]:
    """A valid manual submission with sensible defaults (4 servings of produce)."""
    form: dict[str, Any] = {
        "fullname": "Ada Lovelace",
        "age": "36",
        "consent": True,
        "genetics": "none",
        "diet": "",
        "environment": [],
        "smoking": "none",
        "alcohol": "",
        "activity": "moderate",
        "sleep": "7",
        "height": "170",
        "weight": "65",
        "stress": "",
        "conditions": [],
        "sbp": "",
        "chol": "",
        "glucose": "",
        "fruits": "2",
        "vegetables": "2",
        "noise": False,
        "work": [],
    }
    form.update(overrides)
    return form


@pytest.fixture
def form_factory():
    """Return the ``make_form`` builder."""
    return make_form


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def record_db():
    """Create an in-memory RecordDatabase for testing."""
    from riskbank.core.storage.database import RecordDatabase

    db = RecordDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def record_store(record_db):
    """Create a RecordStore on the in-memory database."""
    from riskbank.core.storage.kv_store import RecordStore

    return RecordStore(record_db)


@pytest.fixture
def record_repository(record_store):
    """Create a RecordRepository backed by in-memory SQLite."""
    from riskbank.core.storage.repository import RecordRepository

    return RecordRepository(record_store)
