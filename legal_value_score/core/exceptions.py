"""
Custom Exceptions - Legal Value Score
legal_value_score/core/exceptions.py

Custom exception classes for repository, scoring and delivery operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class ScoringException(Exception):
    """Base exception for the scoring engine and its input boundary."""

    pass


class ScoringConfigurationError(ScoringException):
    """A scoring variant is internally inconsistent."""

    pass


class UnknownTierError(ScoringException, LookupError):
    """Tier label has no metadata."""

    def __init__(self, tier: str):
        self.tier = tier
        super().__init__(f"Unknown tier '{tier}'")


class EmptyAnswerSetError(ScoringException):
    """No answers were supplied."""

    def __init__(self, message: str = "Answers are required"):
        self.message = message
        super().__init__(message)


class AnswerValidationError(ScoringException):
    """An answer references an unknown question or option."""

    def __init__(self, question_id: str, reason: str):
        self.question_id = question_id
        self.reason = reason
        super().__init__(f"Invalid answer for {question_id}: {reason}")


class EmailDeliveryException(Exception):
    """Transactional email provider rejected or failed the request."""

    def __init__(self, message: str = "Email delivery failed"):
        self.message = message
        super().__init__(message)


class QuizFlowError(ValueError):
    """Illegal questionnaire transition."""

    pass


class MissingEmailAddressException(Exception):
    """Assessment has no email address to send the report to."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__("No email address provided")
