"""
scoring/ - Assessment Scoring Engine

Modules:
    utils.py              - Decimal normalization and currency display helpers
    question_bank.py      - Question / AnswerOption definitions for both questionnaires
    variants.py           - ScoringVariant configuration (legacy impact, opportunity)
    answers.py            - Client selections → validated answer set
    value_potential.py    - Monetary value-potential bucket lookup
    tiers.py              - Tier metadata lookup
    score_calculator.py   - Category normalization, total, tier, value potential
"""

from legal_value_score.scoring.score_calculator import ScoreCalculator, ScoreResult, calculator_for, score
from legal_value_score.scoring.tiers import TierMetadata, get_tier_metadata
from legal_value_score.scoring.utils import format_currency
from legal_value_score.scoring.variants import (
    LEGACY_VARIANT,
    OPPORTUNITY_VARIANT,
    ScoringVariant,
    get_variant,
)

__all__ = [
    "LEGACY_VARIANT",
    "OPPORTUNITY_VARIANT",
    "ScoreCalculator",
    "calculator_for",
    "ScoreResult",
    "ScoringVariant",
    "TierMetadata",
    "format_currency",
    "get_tier_metadata",
    "get_variant",
    "score",
]
