"""Lifestyle risk record model and its closed vocabularies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------------

class Genetics(str, Enum):
    NONE = "none"
    MODERATE = "moderate"
    HIGH = "high"


class Smoking(str, Enum):
    NONE = "none"
    FORMER = "former"
    CURRENT = "current"


class Activity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Environment(str, Enum):
    POLLUTED = "polluted"
    URBAN = "urban"
    GREEN = "green"
    RURAL = "rural"


class Condition(str, Enum):
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    CVD = "cvd"
    CANCER = "cancer"
    ASTHMA = "asthma"
    OBESITY = "obesity"
    KIDNEY = "kidney"


class WorkPattern(str, Enum):
    SHIFT = "shift"
    NIGHT = "night"


# Numeric measurements are stored as the text the user supplied.
NUMERIC_TEXT_FIELDS = (
    "alcohol",
    "sleep",
    "height",
    "weight",
    "stress",
    "sbp",
    "chol",
    "glucose",
    "fruits",
    "vegetables",
)

# Wire order of every serialized record (export and persistence).
FIELD_ORDER = (
    "fullname",
    "age",
    "genetics",
    "diet",
    "environment",
    "created",
    "smoking",
    "alcohol",
    "activity",
    "sleep",
    "height",
    "weight",
    "stress",
    "conditions",
    "sbp",
    "chol",
    "glucose",
    "fruits",
    "vegetables",
    "noise",
    "work",
    "risk",
)


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Record:
    """A canonical lifestyle risk record.

    Instances are only built by the normalizer, so every field is present
    and well-typed. ``risk`` is 0 until the scoring engine fills it in.
    """

    fullname: str
    age: str
    created: str
    genetics: Genetics = Genetics.NONE
    diet: str = ""
    environment: tuple[Environment, ...] = ()
    smoking: Smoking = Smoking.NONE
    alcohol: str = ""
    activity: Activity = Activity.MODERATE
    sleep: str = ""
    height: str = ""
    weight: str = ""
    stress: str = ""
    conditions: tuple[Condition, ...] = ()
    sbp: str = ""
    chol: str = ""
    glucose: str = ""
    fruits: str = ""
    vegetables: str = ""
    noise: bool = False
    work: tuple[WorkPattern, ...] = ()
    risk: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON wire shape, keys in ``FIELD_ORDER``."""
        out: dict[str, Any] = {}
        for name in FIELD_ORDER:
            value = getattr(self, name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = [item.value for item in value]
            out[name] = value
        return out
