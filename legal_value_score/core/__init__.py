"""
Core Package - Legal Value Score
legal_value_score/core/__init__.py

Core infrastructure: exceptions, logging, dependencies.
"""

from legal_value_score.core.exceptions import (
    AnswerValidationError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EmailDeliveryException,
    EmptyAnswerSetError,
    EntityNotFoundException,
    MissingEmailAddressException,
    QuizFlowError,
    RepositoryException,
    ScoringConfigurationError,
    ScoringException,
    UnknownTierError,
)

__all__ = [
    "AnswerValidationError",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EmailDeliveryException",
    "EmptyAnswerSetError",
    "EntityNotFoundException",
    "MissingEmailAddressException",
    "QuizFlowError",
    "RepositoryException",
    "ScoringConfigurationError",
    "ScoringException",
    "UnknownTierError",
]
