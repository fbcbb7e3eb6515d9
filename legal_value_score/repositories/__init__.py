"""
Repositories Package - Legal Value Score
legal_value_score/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from legal_value_score.repositories.base import BaseRepository
from legal_value_score.repositories.analytics_repository import AnalyticsRepository
from legal_value_score.repositories.assessment_repository import AssessmentRepository
from legal_value_score.repositories.email_sequence_repository import EmailSequenceRepository

__all__ = [
    "BaseRepository",
    "AnalyticsRepository",
    "AssessmentRepository",
    "EmailSequenceRepository",
]
