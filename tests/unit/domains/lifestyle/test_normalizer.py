"""Tests for record normalization and the manual-entry validation gate."""

from __future__ import annotations

from datetime import datetime

import pytest

from riskbank.domains.lifestyle.domain_logic.normalizer import (
    RecordValidationError,
    normalize_record,
    validate_form,
)
from riskbank.domains.lifestyle.domain_logic.record_models import (
    FIELD_ORDER,
    Activity,
    Condition,
    Environment,
    Genetics,
    Record,
    Smoking,
    WorkPattern,
)


class TestDefaults:
    def test_empty_mapping_yields_all_defaults(self):
        record = normalize_record({})
        assert record.fullname == ""
        assert record.age == ""
        assert record.genetics is Genetics.NONE
        assert record.smoking is Smoking.NONE
        assert record.activity is Activity.MODERATE
        assert record.environment == ()
        assert record.conditions == ()
        assert record.work == ()
        assert record.noise is False
        assert record.alcohol == record.sleep == record.stress == ""
        assert record.fruits == record.vegetables == ""
        assert record.risk == 0

    @pytest.mark.parametrize("raw", [None, 42, "text", ["a", "b"]])
    def test_non_mapping_input_degrades_to_defaults(self, raw):
        record = normalize_record(raw)
        assert record.fullname == ""
        assert record.activity is Activity.MODERATE

    def test_created_defaults_to_now(self):
        record = normalize_record({})
        parsed = datetime.fromisoformat(record.created)
        assert parsed.tzinfo is not None

    def test_extra_fields_ignored(self):
        record = normalize_record({"fullname": "A", "shoe_size": 44})
        assert "shoe_size" not in record.to_dict()


class TestScalarFields:
    def test_strings_are_stripped(self):
        record = normalize_record({"fullname": "  Ada  ", "diet": " veggies ", "age": " 41 "})
        assert record.fullname == "Ada"
        assert record.diet == "veggies"
        assert record.age == "41"

    def test_numbers_become_text(self):
        record = normalize_record({"age": 40, "weight": 95.0, "height": 170, "sleep": 7.5})
        assert record.age == "40"
        assert record.weight == "95"
        assert record.height == "170"
        assert record.sleep == "7.5"

    def test_age_is_not_range_checked(self):
        assert normalize_record({"age": "200"}).age == "200"
        assert normalize_record({"age": "-4"}).age == "-4"

    def test_invalid_numeric_text_defaults_to_empty(self):
        record = normalize_record({"alcohol": "lots", "sbp": {"value": 150}, "chol": True})
        assert record.alcohol == ""
        assert record.sbp == ""
        assert record.chol == ""

    def test_comma_decimal_text_is_kept(self):
        assert normalize_record({"weight": "70,5"}).weight == "70,5"

    def test_non_string_name_defaults(self):
        assert normalize_record({"fullname": ["A"]}).fullname == ""

    def test_oversized_integers_never_raise(self):
        record = normalize_record({
            "age": 10**5000,
            "sbp": 10**400,
            "conditions": [10**5000, "cvd"],
        })
        assert record.age == ""
        assert record.sbp == ""
        assert record.conditions == (Condition.CVD,)


class TestEnumFields:
    def test_known_values_case_insensitive(self):
        record = normalize_record({"genetics": " High ", "smoking": "CURRENT", "activity": "low"})
        assert record.genetics is Genetics.HIGH
        assert record.smoking is Smoking.CURRENT
        assert record.activity is Activity.LOW

    def test_unknown_values_fall_back(self):
        record = normalize_record({"genetics": "extreme", "smoking": 3, "activity": ""})
        assert record.genetics is Genetics.NONE
        assert record.smoking is Smoking.NONE
        assert record.activity is Activity.MODERATE


class TestSetFields:
    def test_only_lists_accepted(self):
        record = normalize_record({"environment": "polluted", "conditions": {"cvd": True}})
        assert record.environment == ()
        assert record.conditions == ()

    def test_members_kept_in_first_seen_order(self):
        record = normalize_record({
            "environment": ["urban", "polluted", "urban"],
            "conditions": ["kidney", "Diabetes"],
            "work": ["night", "shift"],
        })
        assert record.environment == (Environment.URBAN, Environment.POLLUTED)
        assert record.conditions == (Condition.KIDNEY, Condition.DIABETES)
        assert record.work == (WorkPattern.NIGHT, WorkPattern.SHIFT)

    def test_unknown_and_non_string_elements(self):
        record = normalize_record({"conditions": ["gout", 7, None, "asthma"]})
        assert record.conditions == (Condition.ASTHMA,)


class TestNoiseFlag:
    @pytest.mark.parametrize("value", [True, 1, "true", "yes", "on", "1"])
    def test_truthy(self, value):
        assert normalize_record({"noise": value}).noise is True

    @pytest.mark.parametrize("value", [False, 0, "", "false", "no", None, []])
    def test_falsy(self, value):
        assert normalize_record({"noise": value}).noise is False

    def test_huge_integers(self):
        assert normalize_record({"noise": 10**400}).noise is True
        assert normalize_record({"noise": -(10**400)}).noise is True


class TestCreated:
    def test_valid_timestamp_kept(self):
        record = normalize_record({"created": "2026-02-01T12:00:00.000Z"})
        assert record.created == "2026-02-01T12:00:00.000Z"

    def test_invalid_timestamp_replaced(self):
        record = normalize_record({"created": "yesterday"})
        assert record.created != "yesterday"
        datetime.fromisoformat(record.created)


class TestRiskAndIdempotence:
    def test_supplied_risk_dropped(self):
        assert normalize_record({"risk": 999}).risk == 0

    def test_record_input_drops_risk(self):
        record = normalize_record({"fullname": "A", "created": "2026-01-01T00:00:00Z"})
        scored = Record(**{**record.__dict__, "risk": 55})
        assert normalize_record(scored) == record

    def test_idempotent(self):
        raw = {
            "fullname": " Ada ",
            "age": 52,
            "genetics": "Moderate",
            "environment": ["urban", "bogus", "urban"],
            "alcohol": "7,5",
            "stress": "twelve",
            "noise": "yes",
            "created": "2026-01-01T00:00:00+00:00",
            "risk": 12,
        }
        once = normalize_record(raw)
        assert normalize_record(once.to_dict()) == once
        assert normalize_record(normalize_record(once)) == once

    def test_to_dict_key_order(self):
        assert tuple(normalize_record({}).to_dict()) == FIELD_ORDER


class TestValidateForm:
    def test_valid_form_passes(self, form_factory):
        validate_form(form_factory())

    @pytest.mark.parametrize("overrides", [{"fullname": ""}, {"age": "  "}, {"fullname": None}])
    def test_missing_name_or_age(self, form_factory, overrides):
        with pytest.raises(RecordValidationError, match="at least name and age"):
            validate_form(form_factory(**overrides))

    def test_consent_required(self, form_factory):
        with pytest.raises(RecordValidationError, match="Consent is required"):
            validate_form(form_factory(consent=False))

    @pytest.mark.parametrize("age", ["-1", "131", "abc", "1" * 5000, "-" + "9" * 5000])
    def test_invalid_age(self, form_factory, age):
        with pytest.raises(RecordValidationError, match="Invalid age"):
            validate_form(form_factory(age=age))

    @pytest.mark.parametrize("age", ["0", "130", "45.5", 70])
    def test_age_bounds_inclusive(self, form_factory, age):
        validate_form(form_factory(age=age))
