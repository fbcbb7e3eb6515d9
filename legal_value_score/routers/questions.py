"""
Question Bank Router - Legal Value Score
legal_value_score/routers/questions.py

Endpoints:
  GET /api/v1/questions        - Active variant's question bank
  GET /api/v1/tiers/{tier}     - Presentation metadata for a tier label
"""

from fastapi import APIRouter, Depends, status

from legal_value_score.core.dependencies import get_active_variant
from legal_value_score.core.exceptions import UnknownTierError
from legal_value_score.models.assessment import (
    ErrorResponse,
    OptionResponse,
    QuestionBankResponse,
    QuestionResponse,
    TierMetadataResponse,
)
from legal_value_score.routers.assessments import error_response
from legal_value_score.scoring.tiers import get_tier_metadata
from legal_value_score.scoring.variants import ScoringVariant

router = APIRouter(prefix="/api/v1", tags=["Question Bank"])


@router.get(
    "/questions",
    response_model=QuestionBankResponse,
    summary="Get the active question bank",
)
async def get_questions(variant: ScoringVariant = Depends(get_active_variant)):
    return QuestionBankResponse(
        variant=variant.name,
        title=variant.title,
        categories=dict(variant.category_labels),
        questions=[
            QuestionResponse(
                id=q.id,
                text=q.text,
                options=[
                    OptionResponse(text=o.text, value=o.value, category=o.category)
                    for o in q.options
                ],
            )
            for q in variant.questions
        ],
    )


@router.get(
    "/tiers/{tier}",
    response_model=TierMetadataResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown tier"}},
    summary="Get tier presentation metadata",
)
async def get_tier(tier: str):
    try:
        meta = get_tier_metadata(tier)
    except UnknownTierError as e:
        return error_response(
            status.HTTP_404_NOT_FOUND, "TIER_NOT_FOUND", str(e), {"tier": tier}
        )
    return TierMetadataResponse(tier=tier, **meta.as_dict())
