"""Dashboard statistics over a record collection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from riskbank.domains.lifestyle.domain_logic.coercion import round_half_up
from riskbank.domains.lifestyle.domain_logic.record_models import Record

HIGH_RISK_THRESHOLD = 65
MODERATE_RISK_THRESHOLD = 30


class RiskTier(str, Enum):
    """Display bucket for a risk score. Boundary values fall to the lower tier."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def recommendation(self) -> str:
        return _RECOMMENDATIONS[self]


_RECOMMENDATIONS = {
    RiskTier.LOW: "low — maintain",
    RiskTier.MODERATE: "moderate — preventive action",
    RiskTier.HIGH: "high — follow-up",
}


def classify_risk(risk: int) -> RiskTier:
    """Map a score to its tier (``> 65`` high, ``> 30`` moderate, else low)."""
    if risk > HIGH_RISK_THRESHOLD:
        return RiskTier.HIGH
    if risk > MODERATE_RISK_THRESHOLD:
        return RiskTier.MODERATE
    return RiskTier.LOW


@dataclass
class CollectionSummary:
    """Aggregate view consumed by the dashboard.

    ``average`` and ``average_tier`` are None for an empty collection; the
    consumer renders a placeholder. ``average_tier`` is the collection-level
    indicator: ``"high"`` above 65, ``"low"`` otherwise.
    """

    count: int
    average: int | None
    average_tier: str | None
    per_record_tier: list[RiskTier] = field(default_factory=list)
    tier_counts: dict[str, int] = field(default_factory=dict)
    risks: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "average": self.average,
            "average_tier": self.average_tier,
            "per_record_tier": [
                {"tier": tier.value, "recommendation": tier.recommendation}
                for tier in self.per_record_tier
            ],
            "tier_counts": dict(self.tier_counts),
            "risks": list(self.risks),
        }


def aggregate(collection: Sequence[Record]) -> CollectionSummary:
    """Summarize a collection: count, rounded mean risk, and tiers per record."""
    risks = [record.risk for record in collection]
    tiers = [classify_risk(risk) for risk in risks]
    tier_counts = {tier.value: 0 for tier in RiskTier}
    for tier in tiers:
        tier_counts[tier.value] += 1

    if not risks:
        return CollectionSummary(
            count=0,
            average=None,
            average_tier=None,
            tier_counts=tier_counts,
        )

    average = round_half_up(sum(risks) / len(risks))
    return CollectionSummary(
        count=len(risks),
        average=average,
        average_tier="high" if average > HIGH_RISK_THRESHOLD else "low",
        per_record_tier=tiers,
        tier_counts=tier_counts,
        risks=risks,
    )
