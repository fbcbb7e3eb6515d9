"""
Scoring Variants
legal_value_score/scoring/variants.py

A ScoringVariant bundles everything the engine reads:

    question bank           → which option feeds which category, and with how many points
    category max table      → normalization denominator per category
    tier ladder             → evaluated high-to-low, first match wins, lower bound inclusive
    value bucket tables     → optional monetization (opportunity variant only)

Legacy "impact" variant:
    contract 12 | risk 8 | efficiency 10 | strategic 12
    ≥80 optimized · ≥60 capable · ≥40 at-risk · else exposed

Opportunity variant:
    contract_opportunity 8 | growth_enablement 8 | cost_opportunity 4 | strategic_value 12
    ≥80 maximized · ≥60 strong-foundation · ≥40 significant-opportunity · else transformational

Value buckets (score < 10 | < 18 | else):
    contract_opportunity   225000 | 100000 | 30000
    growth_enablement      250000 | 150000 | 75000
    cost_opportunity       175000 |  75000 | 30000
    strategic_value         75000 |  37500 | 17500

The legacy maxima are kept as published even though its question bank only
reaches 8 raw points in contract, efficiency and strategic; see
normalization_gaps().
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from legal_value_score.core.exceptions import ScoringConfigurationError
from legal_value_score.scoring.question_bank import (
    LEGACY_QUESTIONS,
    OPPORTUNITY_QUESTIONS,
    Question,
    questions_by_id,
)


@dataclass(frozen=True)
class TierThreshold:
    """Lowest total (inclusive) that earns `label`."""
    min_total: int
    label: str


@dataclass(frozen=True)
class ValueBucketTable:
    """
    Step function from a normalized category score to a monetary midpoint.

    `amounts` has one more entry than `breakpoints`; a score below
    breakpoints[i] (strict) maps to amounts[i], otherwise the last amount.
    """
    key: str
    breakpoints: Tuple[int, ...]
    amounts: Tuple[int, ...]

    def amount_for(self, score: int) -> int:
        for breakpoint, amount in zip(self.breakpoints, self.amounts):
            if score < breakpoint:
                return amount
        return self.amounts[-1]


@dataclass(frozen=True)
class ScoringVariant:
    """Complete, validated configuration for one questionnaire."""
    name: str
    title: str
    questions: Tuple[Question, ...]
    category_max: Mapping[str, int]
    category_labels: Mapping[str, str]
    tier_ladder: Tuple[TierThreshold, ...]
    fallback_tier: str
    value_buckets: Optional[Mapping[str, ValueBucketTable]] = None
    _questions_by_id: Dict[str, Question] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        self._validate()
        object.__setattr__(self, "_questions_by_id", questions_by_id(self.questions))

    def _validate(self) -> None:
        if not self.category_max:
            raise ScoringConfigurationError(f"{self.name}: category max table is empty")

        for category, maximum in self.category_max.items():
            if not isinstance(maximum, int) or maximum <= 0:
                raise ScoringConfigurationError(
                    f"{self.name}: category max for '{category}' must be a positive integer, got {maximum!r}"
                )

        seen_ids = set()
        for question in self.questions:
            if question.id in seen_ids:
                raise ScoringConfigurationError(f"{self.name}: duplicate question id '{question.id}'")
            seen_ids.add(question.id)
            if not question.options:
                raise ScoringConfigurationError(f"{self.name}: question '{question.id}' has no options")
            for option in question.options:
                if option.category not in self.category_max:
                    raise ScoringConfigurationError(
                        f"{self.name}: option '{option.text}' of {question.id} uses unknown category '{option.category}'"
                    )

        if not self.tier_ladder:
            raise ScoringConfigurationError(f"{self.name}: tier ladder is empty")
        minimums = [threshold.min_total for threshold in self.tier_ladder]
        if any(high <= low for high, low in zip(minimums, minimums[1:])):
            raise ScoringConfigurationError(
                f"{self.name}: tier thresholds must be strictly descending, got {minimums}"
            )

        for category, table in (self.value_buckets or {}).items():
            if category not in self.category_max:
                raise ScoringConfigurationError(
                    f"{self.name}: value bucket table for unknown category '{category}'"
                )
            if len(table.amounts) != len(table.breakpoints) + 1:
                raise ScoringConfigurationError(
                    f"{self.name}: '{category}' needs {len(table.breakpoints) + 1} amounts"
                )
            if any(a >= b for a, b in zip(table.breakpoints, table.breakpoints[1:])):
                raise ScoringConfigurationError(
                    f"{self.name}: '{category}' breakpoints must be strictly ascending"
                )

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self.category_max)

    @property
    def tier_labels(self) -> Tuple[str, ...]:
        return tuple(t.label for t in self.tier_ladder) + (self.fallback_tier,)

    @property
    def is_monetized(self) -> bool:
        return bool(self.value_buckets)

    def question(self, question_id: str) -> Optional[Question]:
        return self._questions_by_id.get(question_id)

    def classify(self, total: int) -> str:
        """Map a total onto the tier ladder (high-to-low, first match wins)."""
        for threshold in self.tier_ladder:
            if total >= threshold.min_total:
                return threshold.label
        return self.fallback_tier

    def achievable_max(self) -> Dict[str, int]:
        """Highest raw total each category can reach with this question bank."""
        reachable = {category: 0 for category in self.category_max}
        for question in self.questions:
            best: Dict[str, int] = {}
            for option in question.options:
                best[option.category] = max(best.get(option.category, 0), option.value)
            for category, value in best.items():
                reachable[category] += value
        return reachable

    def normalization_gaps(self) -> Dict[str, Tuple[int, int]]:
        """Categories whose declared max differs from the achievable max: (declared, achievable)."""
        reachable = self.achievable_max()
        return {
            category: (declared, reachable[category])
            for category, declared in self.category_max.items()
            if declared != reachable[category]
        }


LEGACY_VARIANT = ScoringVariant(
    name="legacy",
    title="Legal Impact Score",
    questions=LEGACY_QUESTIONS,
    category_max={
        "contract": 12,
        "risk": 8,
        "efficiency": 10,
        "strategic": 12,
    },
    category_labels={
        "contract": "Contract Management",
        "risk": "Risk & Compliance",
        "efficiency": "Operational Efficiency",
        "strategic": "Strategic Alignment",
    },
    tier_ladder=(
        TierThreshold(80, "optimized"),
        TierThreshold(60, "capable"),
        TierThreshold(40, "at-risk"),
    ),
    fallback_tier="exposed",
)

OPPORTUNITY_VARIANT = ScoringVariant(
    name="opportunity",
    title="Legal Value Score",
    questions=OPPORTUNITY_QUESTIONS,
    category_max={
        "contract_opportunity": 8,
        "growth_enablement": 8,
        "cost_opportunity": 4,
        "strategic_value": 12,
    },
    category_labels={
        "contract_opportunity": "Contract Value Recovery",
        "growth_enablement": "Growth Enablement",
        "cost_opportunity": "Cost Optimization",
        "strategic_value": "Strategic Value",
    },
    tier_ladder=(
        TierThreshold(80, "maximized"),
        TierThreshold(60, "strong-foundation"),
        TierThreshold(40, "significant-opportunity"),
    ),
    fallback_tier="transformational",
    value_buckets={
        "contract_opportunity": ValueBucketTable("contract", (10, 18), (225000, 100000, 30000)),
        "growth_enablement": ValueBucketTable("growth", (10, 18), (250000, 150000, 75000)),
        "cost_opportunity": ValueBucketTable("cost", (10, 18), (175000, 75000, 30000)),
        "strategic_value": ValueBucketTable("strategic", (10, 18), (75000, 37500, 17500)),
    },
)

VARIANTS: Dict[str, ScoringVariant] = {
    LEGACY_VARIANT.name: LEGACY_VARIANT,
    OPPORTUNITY_VARIANT.name: OPPORTUNITY_VARIANT,
}


def get_variant(name: str) -> ScoringVariant:
    """Look up a registered variant by name."""
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise ScoringConfigurationError(
            f"Unknown scoring variant '{name}'. Expected one of: {', '.join(VARIANTS)}"
        ) from None
