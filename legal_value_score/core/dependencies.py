"""
Dependencies - Legal Value Score
legal_value_score/core/dependencies.py

FastAPI dependency injection for repositories and services.
"""

from functools import lru_cache

from legal_value_score.config import get_settings
from legal_value_score.repositories.analytics_repository import AnalyticsRepository
from legal_value_score.repositories.assessment_repository import AssessmentRepository
from legal_value_score.repositories.email_sequence_repository import EmailSequenceRepository
from legal_value_score.scoring.variants import ScoringVariant, get_variant
from legal_value_score.services.assessment_service import AssessmentService
from legal_value_score.services.cache import get_cache
from legal_value_score.services.email_service import EmailService


@lru_cache()
def get_active_variant() -> ScoringVariant:
    """Variant selected by SCORING_VARIANT."""
    return get_variant(get_settings().SCORING_VARIANT)


@lru_cache()
def get_assessment_repository() -> AssessmentRepository:
    """Get cached AssessmentRepository instance."""
    return AssessmentRepository()


@lru_cache()
def get_email_sequence_repository() -> EmailSequenceRepository:
    """Get cached EmailSequenceRepository instance."""
    return EmailSequenceRepository()


@lru_cache()
def get_analytics_repository() -> AnalyticsRepository:
    """Get cached AnalyticsRepository instance."""
    return AnalyticsRepository()


@lru_cache()
def get_assessment_service() -> AssessmentService:
    """Get cached AssessmentService wired to Snowflake and (if reachable) Redis."""
    settings = get_settings()
    return AssessmentService(
        variant=get_active_variant(),
        assessment_repo=get_assessment_repository(),
        email_sequence_repo=get_email_sequence_repository(),
        analytics_repo=get_analytics_repository(),
        cache=get_cache(),
        cache_ttl=settings.CACHE_TTL_ASSESSMENT,
    )


@lru_cache()
def get_email_service() -> EmailService:
    """Get cached EmailService (SendGrid)."""
    settings = get_settings()
    api_key = settings.SENDGRID_API_KEY.get_secret_value() if settings.SENDGRID_API_KEY else None
    return EmailService(
        assessments=get_assessment_service(),
        api_key=api_key,
        from_email=settings.EMAIL_FROM,
        app_url=settings.PUBLIC_APP_URL,
        api_url=settings.SENDGRID_API_URL,
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )
