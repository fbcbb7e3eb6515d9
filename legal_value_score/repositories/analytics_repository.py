"""
Analytics Repository - Legal Value Score
legal_value_score/repositories/analytics_repository.py
"""

from typing import Any, Dict, Optional
from uuid import uuid4

from legal_value_score.models.enumerations import AnalyticsEventType
from legal_value_score.repositories.base import BaseRepository


class AnalyticsRepository(BaseRepository):
    """Repository for ANALYTICS_EVENTS rows."""

    TABLE_NAME = "ANALYTICS_EVENTS"

    def track(
        self,
        event_type: AnalyticsEventType,
        assessment_id: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Insert one analytics event and return its ID."""
        event_id = str(uuid4())
        self.insert({
            "id": event_id,
            "event_type": event_type.value,
            "assessment_id": str(assessment_id) if assessment_id else None,
            "properties": self.to_json(properties or {}),
            "created_at": self.utc_now(),
        })
        return event_id
