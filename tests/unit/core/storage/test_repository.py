"""Tests for RecordRepository — collection load/append/replace/clear."""

from __future__ import annotations

import threading

from riskbank.core.storage.repository import RecordRepository
from riskbank.domains.lifestyle.domain_logic.collection import prepend_record, replace_collection
from riskbank.domains.lifestyle.domain_logic.normalizer import normalize_record
from riskbank.domains.lifestyle.domain_logic.scoring_engine import score_record


def _record(name: str, age: str = "40"):
    return score_record(normalize_record({
        "fullname": name, "age": age, "created": "2026-02-01T12:00:00Z",
    }))


class TestCollectionTransforms:
    def test_prepend_does_not_mutate(self):
        original = [_record("old")]
        updated = prepend_record(original, _record("new"))
        assert [r.fullname for r in updated] == ["new", "old"]
        assert [r.fullname for r in original] == ["old"]

    def test_replace_discards_prior(self):
        updated = replace_collection([_record("old")], [_record("a"), _record("b")])
        assert [r.fullname for r in updated] == ["a", "b"]


class TestLoad:
    def test_empty_store_loads_empty(self, record_repository):
        assert record_repository.load() == []
        assert record_repository.count() == 0

    def test_corrupt_slot_loads_empty(self, record_store, record_repository):
        record_store.write("{not json")
        assert record_repository.load() == []

    def test_stale_stored_risk_is_recomputed(self, record_store, record_repository):
        record_store.write('[{"fullname": "A", "age": "70", "risk": 1}]')
        loaded = record_repository.load()
        assert loaded[0].risk == _record("A", age="70").risk


class TestAppend:
    def test_newest_first(self, record_repository):
        record_repository.append(_record("first"))
        record_repository.append(_record("second"))
        assert [r.fullname for r in record_repository.load()] == ["second", "first"]

    def test_duplicates_permitted(self, record_repository):
        record_repository.append(_record("same"))
        record_repository.append(_record("same"))
        assert record_repository.count() == 2

    def test_concurrent_appends_are_not_lost(self, record_repository):
        threads = [
            threading.Thread(target=record_repository.append, args=(_record(f"r{i}"),))
            for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert record_repository.count() == 20


class TestReplaceAndClear:
    def test_replace_is_full_overwrite(self, record_repository):
        record_repository.append(_record("old"))
        result = record_repository.replace([_record("a"), _record("b")])
        assert [r.fullname for r in result] == ["a", "b"]
        assert [r.fullname for r in record_repository.load()] == ["a", "b"]

    def test_replace_with_empty(self, record_repository):
        record_repository.append(_record("old"))
        record_repository.replace([])
        assert record_repository.load() == []

    def test_clear_returns_count(self, record_repository):
        record_repository.append(_record("a"))
        record_repository.append(_record("b"))
        assert record_repository.clear() == 2
        assert record_repository.load() == []

    def test_repositories_share_the_slot(self, record_store):
        RecordRepository(record_store).append(_record("shared"))
        assert RecordRepository(record_store).count() == 1
