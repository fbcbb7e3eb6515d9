# legal_value_score/scoring/score_calculator.py
"""
Score Calculator
-----------------
Turns an answer set (question id → chosen AnswerOption) into a ScoreResult.

Formula:
    raw[c]        = Σ option.value for answered options tagged c
    breakdown[c]  = round_half_up(raw[c] / category_max[c] × 25)
    total         = Σ breakdown[c]            (no separate rounding)
    tier          = first ladder rung with total ≥ min_total, else fallback
    value         = bucket lookup per breakdown[c]   (monetized variants only)

Unanswered questions contribute 0. Answers for unknown question ids, `None`
answers and options tagged with an unknown category are logged and skipped.
"""
import structlog
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from legal_value_score.scoring.question_bank import AnswerOption
from legal_value_score.scoring.utils import CATEGORY_SCALE, normalize_to_scale
from legal_value_score.scoring.value_potential import ValuePotential, ValuePotentialCalculator
from legal_value_score.scoring.variants import OPPORTUNITY_VARIANT, ScoringVariant

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    """Output of ScoreCalculator.calculate()."""
    variant: str
    total: int                          # Σ breakdown, nominally 0-100
    breakdown: Dict[str, int]           # normalized category → 0-25
    raw: Dict[str, int]                 # category → summed option points
    tier: str
    value_potential: Optional[ValuePotential] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "total": self.total,
            "breakdown": dict(self.breakdown),
            "tier": self.tier,
        }
        if self.value_potential is not None:
            data["value_potential"] = self.value_potential.as_dict()
        return data


class ScoreCalculator:
    """Score an answer set against one ScoringVariant."""

    def __init__(self, variant: ScoringVariant = OPPORTUNITY_VARIANT):
        self.variant = variant
        self.value_calculator = (
            ValuePotentialCalculator(variant.value_buckets) if variant.is_monetized else None
        )
        for category, (declared, achievable) in variant.normalization_gaps().items():
            logger.warning(
                "category_max_mismatch",
                variant=variant.name,
                category=category,
                declared_max=declared,
                achievable_max=achievable,
            )

    def calculate(self, answers: Mapping[str, Optional[AnswerOption]]) -> ScoreResult:
        """
        Args:
            answers: question id → chosen AnswerOption. May be partial.

        Returns:
            ScoreResult with total, breakdown, raw sums, tier and value potential.
        """
        raw: Dict[str, int] = {category: 0 for category in self.variant.category_max}

        for question_id, option in answers.items():
            if option is None:
                continue
            if self.variant.question(question_id) is None:
                logger.warning(
                    "answer_ignored",
                    variant=self.variant.name,
                    question_id=question_id,
                    reason="unknown_question",
                )
                continue
            if option.category not in raw:
                logger.warning(
                    "answer_ignored",
                    variant=self.variant.name,
                    question_id=question_id,
                    category=option.category,
                    reason="unknown_category",
                )
                continue
            raw[option.category] += option.value

        breakdown = {
            category: normalize_to_scale(points, self.variant.category_max.get(category), CATEGORY_SCALE)
            for category, points in raw.items()
        }
        total = sum(breakdown.values())
        tier = self.variant.classify(total)
        value_potential = (
            self.value_calculator.calculate(breakdown) if self.value_calculator else None
        )

        logger.info(
            "scores_calculated",
            variant=self.variant.name,
            answered=len(answers),
            raw=raw,
            breakdown=breakdown,
            total=total,
            tier=tier,
            value_potential_total=value_potential.total if value_potential else None,
        )

        return ScoreResult(
            variant=self.variant.name,
            total=total,
            breakdown=breakdown,
            raw=raw,
            tier=tier,
            value_potential=value_potential,
        )


_calculators: Dict[str, ScoreCalculator] = {}


def calculator_for(variant: ScoringVariant) -> ScoreCalculator:
    """
    Shared calculator for a variant, built on first use.

    The variant's category_max_mismatch warnings are logged when it is built.
    """
    calculator = _calculators.get(variant.name)
    if calculator is None or calculator.variant is not variant:
        calculator = ScoreCalculator(variant)
        _calculators[variant.name] = calculator
    return calculator


def reset_calculators() -> None:
    """Drop shared calculators; the next calculator_for() rebuilds them."""
    _calculators.clear()


def score(
    answers: Mapping[str, Optional[AnswerOption]],
    variant: ScoringVariant = OPPORTUNITY_VARIANT,
) -> ScoreResult:
    """Score an answer set with the shared calculator for `variant`."""
    return calculator_for(variant).calculate(answers)
