"""Record normalization and manual-entry validation.

``normalize_record`` is the single definition of what a stored record looks
like. It turns any untrusted mapping (a form submission or one element of an
imported document) into a canonical :class:`Record` and never raises: a
field that fails to parse falls back to its default.

``validate_form`` is the stricter gate applied only to interactive entry.
Bulk import deliberately skips it.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from riskbank.domains.lifestyle.domain_logic.coercion import parse_int_prefix, parse_number
from riskbank.domains.lifestyle.domain_logic.record_models import (
    NUMERIC_TEXT_FIELDS,
    Activity,
    Condition,
    Environment,
    Genetics,
    Record,
    Smoking,
    WorkPattern,
)

E = TypeVar("E", bound=Enum)

MIN_AGE = 0
MAX_AGE = 130

_TRUTHY_TEXT = {"true", "1", "yes", "on"}


class RecordValidationError(ValueError):
    """Raised when a manual submission fails validation. The message is user-facing."""


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _text(value: Any) -> str:
    """Coerce a scalar to stripped text; anything else becomes ``""``."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # Past the interpreter's int-to-str digit limit.
            return ""
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    return ""


def _numeric_text(value: Any) -> str:
    text = _text(value)
    return text if not math.isnan(parse_number(text)) else ""


def _member(value: Any, enum_cls: type[E], default: E) -> E:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return default
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return default


def _members(value: Any, enum_cls: type[E]) -> tuple[E, ...]:
    """Coerce a list of flags to known members, first-seen order, no repeats."""
    if not isinstance(value, (list, tuple)):
        return ()
    seen: list[E] = []
    for item in value:
        if isinstance(item, Enum):
            key = item.value
        elif isinstance(item, str):
            key = item.strip().lower()
        else:
            continue
        try:
            member = enum_cls(key)
        except ValueError:
            continue
        if member not in seen:
            seen.append(member)
    return tuple(seen)


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_TEXT
    return False


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _timestamp(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        text = value.strip()
        candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            datetime.fromisoformat(candidate)
        except ValueError:
            return _now_iso()
        return text
    return _now_iso()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_record(raw: Any) -> Record:
    """Build a canonical, unscored record from an untrusted input.

    Accepts a mapping (extra keys ignored) or an existing :class:`Record`.
    Any other input yields an all-default record. A supplied ``risk`` is
    always dropped; the result carries ``risk=0`` until scored.
    """
    if isinstance(raw, Record):
        return replace(raw, risk=0)
    if not isinstance(raw, Mapping):
        raw = {}

    numeric = {name: _numeric_text(raw.get(name)) for name in NUMERIC_TEXT_FIELDS}
    return Record(
        fullname=_text(raw.get("fullname")),
        age=_text(raw.get("age")),
        genetics=_member(raw.get("genetics"), Genetics, Genetics.NONE),
        diet=_text(raw.get("diet")),
        environment=_members(raw.get("environment"), Environment),
        created=_timestamp(raw.get("created")),
        smoking=_member(raw.get("smoking"), Smoking, Smoking.NONE),
        activity=_member(raw.get("activity"), Activity, Activity.MODERATE),
        conditions=_members(raw.get("conditions"), Condition),
        noise=_flag(raw.get("noise")),
        work=_members(raw.get("work"), WorkPattern),
        **numeric,
    )


def validate_form(form: Mapping[str, Any]) -> None:
    """Check an interactive submission before it is normalized.

    Raises:
        RecordValidationError: If name or age is missing, consent was not
            given, or age is not an integer in [0, 130].
    """
    if not _text(form.get("fullname")) or not _text(form.get("age")):
        raise RecordValidationError("Please provide at least name and age.")
    if not _flag(form.get("consent")):
        raise RecordValidationError("Consent is required to share this data (simulation).")
    age = parse_int_prefix(_text(form.get("age")))
    if age is None or age < MIN_AGE or age > MAX_AGE:
        raise RecordValidationError("Invalid age.")
