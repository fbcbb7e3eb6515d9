"""
Assessment Service - Submission Orchestrator
legal_value_score/services/assessment_service.py

Handles one completed questionnaire:

  1. Resolve client selections against the active question bank
  2. Score the answer set (ScoreCalculator)
  3. Flatten scores + contact + attribution + request metadata into a record
  4. Persist the record to ASSESSMENTS (Snowflake)
  5. Queue follow-up email #1 when an email address was given
  6. Track an assessment_completed analytics event

Steps 5 and 6 are best effort: failures are logged, never raised.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from legal_value_score.core.exceptions import EntityNotFoundException, RepositoryException
from legal_value_score.models.assessment import AssessmentSubmission, RequestMetadata
from legal_value_score.models.enumerations import AnalyticsEventType, EmailType
from legal_value_score.repositories.analytics_repository import AnalyticsRepository
from legal_value_score.repositories.assessment_repository import AssessmentRepository
from legal_value_score.repositories.email_sequence_repository import EmailSequenceRepository
from legal_value_score.scoring.answers import resolve_answer_set, serialize_answer_set
from legal_value_score.scoring.question_bank import AnswerOption
from legal_value_score.scoring.score_calculator import ScoreResult, calculator_for
from legal_value_score.scoring.variants import ScoringVariant
from legal_value_score.services.cache import assessment_key
from legal_value_score.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)


def build_assessment_record(
    submission: AssessmentSubmission,
    answers: Mapping[str, AnswerOption],
    result: ScoreResult,
    meta: RequestMetadata,
    variant: ScoringVariant,
) -> Dict[str, Any]:
    """
    Flatten one scored submission into ASSESSMENTS columns.

    Per-category columns are `<category>_score`; monetized variants add
    `value_potential_<key>` and `value_potential_total`.
    """
    record: Dict[str, Any] = {
        "variant": result.variant,
        "persona": submission.persona.value,
        "answers": serialize_answer_set(answers),
        "email": submission.email or None,
        "first_name": submission.first_name or None,
        "last_name": submission.last_name or None,
        "company_name": submission.company_name or None,
        "job_title": submission.job_title or None,
        "total_score": result.total,
    }

    for category in variant.categories:
        record[f"{category}_score"] = result.breakdown[category]

    if result.value_potential is not None:
        for key, amount in result.value_potential.amounts.items():
            record[f"value_potential_{key}"] = amount
        record["value_potential_total"] = result.value_potential.total

    record.update(
        {
            "tier": result.tier,
            "utm_source": submission.utm_source or None,
            "utm_medium": submission.utm_medium or None,
            "utm_campaign": submission.utm_campaign or None,
            "utm_content": submission.utm_content or None,
            "ip_address": meta.ip_address,
            "user_agent": meta.user_agent,
            "referrer": meta.referrer,
            "email_sent": False,
        }
    )
    return record


class AssessmentService:
    """
    Scores and records assessments.

    Reads from:
      - ASSESSMENTS (via Redis cache when available)

    Writes to:
      - ASSESSMENTS
      - EMAIL_SEQUENCES
      - ANALYTICS_EVENTS
    """

    def __init__(
        self,
        variant: ScoringVariant,
        assessment_repo: AssessmentRepository,
        email_sequence_repo: EmailSequenceRepository,
        analytics_repo: AnalyticsRepository,
        cache: Optional[RedisCache] = None,
        cache_ttl: int = 120,
    ):
        self.variant = variant
        self.calculator = calculator_for(variant)
        self.assessment_repo = assessment_repo
        self.email_sequence_repo = email_sequence_repo
        self.analytics_repo = analytics_repo
        self.cache = cache
        self.cache_ttl = cache_ttl

    def submit(
        self,
        submission: AssessmentSubmission,
        meta: Optional[RequestMetadata] = None,
    ) -> Tuple[str, ScoreResult]:
        """
        Score and persist a submission.

        Raises:
            EmptyAnswerSetError / AnswerValidationError: invalid answers (nothing persisted)
            RepositoryException: the assessment record could not be saved
        """
        answers = resolve_answer_set(submission.answers, self.variant)
        result = self.calculator.calculate(answers)

        record = build_assessment_record(
            submission, answers, result, meta or RequestMetadata(), self.variant
        )
        assessment_id = self.assessment_repo.create(record)
        logger.info(
            f"Assessment {assessment_id} saved: variant={result.variant} "
            f"total={result.total} tier={result.tier} persona={submission.persona.value}"
        )

        if submission.email:
            self.schedule_results_email(assessment_id)

        self.track(
            AnalyticsEventType.ASSESSMENT_COMPLETED,
            assessment_id,
            {
                "variant": result.variant,
                "persona": submission.persona.value,
                "total": result.total,
                "tier": result.tier,
                "utm_source": submission.utm_source,
                "utm_campaign": submission.utm_campaign,
            },
        )
        return assessment_id, result

    def schedule_results_email(self, assessment_id: str) -> bool:
        try:
            self.email_sequence_repo.schedule(assessment_id, 1, EmailType.IMMEDIATE_RESULTS)
            return True
        except RepositoryException as e:
            logger.error(f"Error scheduling email for assessment {assessment_id}: {e}")
            return False

    def track(
        self,
        event_type: AnalyticsEventType,
        assessment_id: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Record an analytics event; returns False instead of raising on failure."""
        try:
            self.analytics_repo.track(event_type, assessment_id, properties)
            return True
        except RepositoryException as e:
            logger.error(f"Error tracking {event_type.value} event: {e}")
            return False

    def get_assessment(self, assessment_id: str) -> Dict[str, Any]:
        """
        Load an assessment record, cache first.

        Raises:
            EntityNotFoundException: unknown assessment ID
        """
        key = assessment_key(assessment_id)
        if self.cache:
            try:
                cached = self.cache.get(key)
                if cached:
                    return cached
            except Exception as e:
                logger.warning(f"Cache read failed for {key}: {e}")

        record = self.assessment_repo.get_by_id(assessment_id)
        if not record:
            raise EntityNotFoundException("Assessment", assessment_id)

        if self.cache:
            try:
                self.cache.set(key, record, self.cache_ttl)
            except Exception as e:
                logger.warning(f"Cache write failed for {key}: {e}")
        return record

    def mark_email_sent(self, assessment_id: str) -> Dict[str, Any]:
        updated = self.assessment_repo.update(
            assessment_id,
            {"email_sent": True, "email_sent_at": datetime.now(timezone.utc)},
        )
        self.invalidate(assessment_id)
        return updated

    def invalidate(self, assessment_id: str) -> None:
        """Invalidate assessment cache entry in Redis."""
        if self.cache:
            try:
                self.cache.delete(assessment_key(assessment_id))
            except Exception as e:
                logger.warning(f"Cache invalidation failed for assessment {assessment_id}: {e}")
