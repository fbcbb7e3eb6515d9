"""
Assessment Repository - Legal Value Score
legal_value_score/repositories/assessment_repository.py

Completed assessments, one flat row each. The per-category score columns
depend on the scoring variant (contract_score … for legacy,
contract_opportunity_score … for opportunity), so column lists are taken
from the record keys rather than fixed here.
"""

from typing import Any, Dict, Optional
from uuid import uuid4

from legal_value_score.repositories.base import BaseRepository


class AssessmentRepository(BaseRepository):
    """Repository for ASSESSMENTS rows."""

    TABLE_NAME = "ASSESSMENTS"
    ENTITY_NAME = "Assessment"

    def create(self, record: Dict[str, Any]) -> str:
        """Insert a flattened assessment record and return its new ID."""
        assessment_id = str(uuid4())
        row = {"id": assessment_id, "created_at": self.utc_now(), **record}
        if isinstance(row.get("answers"), (dict, list)):
            row["answers"] = self.to_json(row["answers"])
        self.insert(row)
        return assessment_id

    def get_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        row = self.fetch_by_id(assessment_id)
        if not row:
            return None
        return self.to_record(row, json_columns=("answers",))

    def update(self, assessment_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Apply column updates and return the stored record."""
        self.update_by_id(assessment_id, updates)
        return self.get_by_id(assessment_id)
