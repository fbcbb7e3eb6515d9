"""
Email Sequence Repository - Legal Value Score
legal_value_score/repositories/email_sequence_repository.py

Follow-up email schedule per assessment. Rows are written as pending;
delivery of the later sequence steps is handled outside this service.
"""

from uuid import uuid4

from legal_value_score.models.enumerations import EmailStatus, EmailType
from legal_value_score.repositories.base import BaseRepository


class EmailSequenceRepository(BaseRepository):
    """Repository for EMAIL_SEQUENCES rows."""

    TABLE_NAME = "EMAIL_SEQUENCES"

    def schedule(self, assessment_id: str, email_number: int, email_type: EmailType) -> str:
        """
        Queue an email of the follow-up sequence.

        Args:
            assessment_id: Owning assessment
            email_number: Position in the sequence (1 = immediate results)
            email_type: Template identifier

        Returns:
            Generated sequence row ID
        """
        sequence_id = str(uuid4())
        self.insert({
            "id": sequence_id,
            "assessment_id": str(assessment_id),
            "email_number": email_number,
            "email_type": email_type.value,
            "status": EmailStatus.PENDING.value,
            "created_at": self.utc_now(),
        })
        return sequence_id
