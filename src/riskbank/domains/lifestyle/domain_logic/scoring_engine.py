"""Deterministic lifestyle risk scoring: canonical record -> integer in [0, 100].

The score is a plain sum of per-factor contributions. Within a banded factor
the first matching band wins; separate factors never interact. The running
sum is neither rounded nor clamped until the very end.

All formulas are deterministic. Nothing here performs I/O or mutates its input.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import replace

from riskbank.domains.lifestyle.domain_logic.coercion import (
    clamp,
    derive_bmi,
    parse_int_prefix,
    parse_number,
    round_half_up,
)
from riskbank.domains.lifestyle.domain_logic.record_models import (
    Activity,
    Condition,
    Environment,
    Genetics,
    Record,
    Smoking,
    WorkPattern,
)

MIN_SCORE = 0
MAX_SCORE = 100

Band = tuple[Callable[[float], bool], float]


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------

GENETICS_POINTS = {Genetics.NONE: 0, Genetics.MODERATE: 18, Genetics.HIGH: 32}
ENVIRONMENT_POINTS = {
    Environment.POLLUTED: 20,
    Environment.URBAN: 6,
    Environment.GREEN: -6,
    Environment.RURAL: -2,
}
SMOKING_POINTS = {Smoking.NONE: 0, Smoking.FORMER: 5, Smoking.CURRENT: 20}
ACTIVITY_POINTS = {Activity.LOW: 6, Activity.MODERATE: 0, Activity.HIGH: -6}
CONDITION_POINTS = {
    Condition.DIABETES: 12,
    Condition.HYPERTENSION: 10,
    Condition.CVD: 20,
    Condition.CANCER: 8,
    Condition.ASTHMA: 6,
    Condition.OBESITY: 8,
    Condition.KIDNEY: 12,
}
WORK_POINTS = {WorkPattern.SHIFT: 4, WorkPattern.NIGHT: 4}

DIET_RISK_TERMS = ("fast", "soda", "fried")
DIET_PROTECTIVE_TERMS = ("veget", "mediterr")
DIET_RISK_POINTS = 10
DIET_PROTECTIVE_POINTS = -6

STRESS_POINTS_PER_UNIT = 1
NOISE_POINTS = 3

AGE_BANDS: Sequence[Band] = (
    (lambda age: age > 60, 25),
    (lambda age: age > 45, 15),
    (lambda age: age > 30, 6),
)
ALCOHOL_BANDS: Sequence[Band] = (
    (lambda units: units > 14, 6),
    (lambda units: units >= 7, 3),
)
SLEEP_BANDS: Sequence[Band] = (
    (lambda hours: hours < 6, 8),
    (lambda hours: hours > 9, 4),
)
BMI_BANDS: Sequence[Band] = (
    (lambda bmi: bmi >= 30, 12),
    (lambda bmi: bmi >= 25, 6),
    (lambda bmi: bmi < 18.5, 3),
)
# The upper vitals bands include the lower band's points (160 mmHg -> 8 + 6).
SBP_BANDS: Sequence[Band] = (
    (lambda sbp: sbp > 160, 8 + 6),
    (lambda sbp: sbp > 140, 8),
)
CHOLESTEROL_BANDS: Sequence[Band] = (
    (lambda chol: chol >= 240, 5 + 5),
    (lambda chol: chol >= 200, 5),
)
GLUCOSE_BANDS: Sequence[Band] = (
    (lambda glucose: glucose >= 126, 6 + 6),
    (lambda glucose: glucose >= 100, 6),
)
# Fruit + vegetable servings per day; [3, 5) scores nothing.
NUTRITION_BANDS: Sequence[Band] = (
    (lambda servings: servings < 1, 10),
    (lambda servings: servings < 3, 6),
    (lambda servings: servings >= 5, -4),
)


def _first_band(value: float, bands: Sequence[Band]) -> float:
    """Points of the first band whose predicate holds; NaN scores nothing."""
    if math.isnan(value):
        return 0
    for predicate, points in bands:
        if predicate(value):
            return points
    return 0


def _number_or_zero(text: str) -> float:
    number = parse_number(text)
    return 0.0 if math.isnan(number) else number


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------

def _age(record: Record) -> float:
    return _first_band(float(parse_int_prefix(record.age) or 0), AGE_BANDS)


def _genetics(record: Record) -> float:
    return GENETICS_POINTS[record.genetics]


def _environment(record: Record) -> float:
    return sum(ENVIRONMENT_POINTS[flag] for flag in record.environment)


def _diet(record: Record) -> float:
    text = record.diet.lower()
    points = 0
    if any(term in text for term in DIET_RISK_TERMS):
        points += DIET_RISK_POINTS
    if any(term in text for term in DIET_PROTECTIVE_TERMS):
        points += DIET_PROTECTIVE_POINTS
    return points


def _smoking(record: Record) -> float:
    return SMOKING_POINTS[record.smoking]


def _alcohol(record: Record) -> float:
    return _first_band(parse_number(record.alcohol), ALCOHOL_BANDS)


def _activity(record: Record) -> float:
    return ACTIVITY_POINTS[record.activity]


def _sleep(record: Record) -> float:
    return _first_band(parse_number(record.sleep), SLEEP_BANDS)


def _bmi(record: Record) -> float:
    return _first_band(derive_bmi(record.weight, record.height), BMI_BANDS)


def _stress(record: Record) -> float:
    return clamp(_number_or_zero(record.stress), 0, 10) * STRESS_POINTS_PER_UNIT


def _conditions(record: Record) -> float:
    return sum(CONDITION_POINTS[condition] for condition in record.conditions)


def _blood_pressure(record: Record) -> float:
    return _first_band(parse_number(record.sbp), SBP_BANDS)


def _cholesterol(record: Record) -> float:
    return _first_band(parse_number(record.chol), CHOLESTEROL_BANDS)


def _glucose(record: Record) -> float:
    return _first_band(parse_number(record.glucose), GLUCOSE_BANDS)


def _nutrition(record: Record) -> float:
    servings = _number_or_zero(record.fruits) + _number_or_zero(record.vegetables)
    return _first_band(servings, NUTRITION_BANDS)


def _noise(record: Record) -> float:
    return NOISE_POINTS if record.noise else 0


def _work(record: Record) -> float:
    return sum(WORK_POINTS[pattern] for pattern in record.work)


FACTORS: Sequence[tuple[str, Callable[[Record], float]]] = (
    ("age", _age),
    ("genetics", _genetics),
    ("environment", _environment),
    ("diet", _diet),
    ("smoking", _smoking),
    ("alcohol", _alcohol),
    ("activity", _activity),
    ("sleep", _sleep),
    ("bmi", _bmi),
    ("stress", _stress),
    ("conditions", _conditions),
    ("blood_pressure", _blood_pressure),
    ("cholesterol", _cholesterol),
    ("glucose", _glucose),
    ("nutrition", _nutrition),
    ("noise", _noise),
    ("work", _work),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def score_breakdown(record: Record) -> dict[str, float]:
    """Return each factor's contribution, in evaluation order."""
    return {name: factor(record) for name, factor in FACTORS}


def score(record: Record) -> int:
    """Compute the risk score of a canonical record.

    Returns:
        ``clamp(round(sum of contributions), 0, 100)`` as an int.
    """
    total = sum(score_breakdown(record).values())
    return int(clamp(round_half_up(total), MIN_SCORE, MAX_SCORE))


def score_record(record: Record) -> Record:
    """Return a copy of ``record`` with ``risk`` recomputed."""
    return replace(record, risk=score(record))
