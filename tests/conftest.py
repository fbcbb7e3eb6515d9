# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration for the scoring engine and API

Persistence is replaced by in-memory repositories so the API can be exercised
end to end without Snowflake, Redis or SendGrid:

- InMemoryAssessmentRepository   → ASSESSMENTS
- InMemoryEmailSequenceRepository → EMAIL_SEQUENCES
- InMemoryAnalyticsRepository    → ANALYTICS_EVENTS
- DictCache                      → RedisCache
"""

import copy
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

from legal_value_score.core.dependencies import (
    get_active_variant,
    get_assessment_service,
    get_email_service,
)
from legal_value_score.core.exceptions import EntityNotFoundException, RepositoryException
from legal_value_score.main import app
from legal_value_score.scoring.variants import LEGACY_VARIANT, OPPORTUNITY_VARIANT
from legal_value_score.services.assessment_service import AssessmentService
from legal_value_score.services.email_service import EmailService


# =============================================================================
# IN-MEMORY COLLABORATORS
# =============================================================================

class InMemoryAssessmentRepository:
    """Stores flattened assessment records in a dict keyed by ID."""

    def __init__(self, fail: bool = False):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.fail = fail

    def create(self, record: Dict[str, Any]) -> str:
        if self.fail:
            raise RepositoryException("Database error: warehouse suspended")
        assessment_id = str(uuid4())
        self.rows[assessment_id] = {
            "id": assessment_id,
            "created_at": datetime.now(timezone.utc),
            **copy.deepcopy(record),
        }
        return assessment_id

    def get_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        row = self.rows.get(assessment_id)
        return copy.deepcopy(row) if row else None

    def update(self, assessment_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        if assessment_id not in self.rows:
            raise EntityNotFoundException("Assessment", assessment_id)
        self.rows[assessment_id].update(updates)
        return self.get_by_id(assessment_id)


class InMemoryEmailSequenceRepository:
    def __init__(self, fail: bool = False):
        self.scheduled: List[Dict[str, Any]] = []
        self.fail = fail

    def schedule(self, assessment_id, email_number, email_type) -> str:
        if self.fail:
            raise RepositoryException("Query error: table EMAIL_SEQUENCES does not exist")
        self.scheduled.append(
            {"assessment_id": assessment_id, "email_number": email_number, "email_type": email_type.value}
        )
        return str(uuid4())


class InMemoryAnalyticsRepository:
    def __init__(self, fail: bool = False):
        self.events: List[Dict[str, Any]] = []
        self.fail = fail

    def track(self, event_type, assessment_id=None, properties=None) -> str:
        if self.fail:
            raise RepositoryException("Database error: connection reset")
        self.events.append(
            {"event_type": event_type.value, "assessment_id": assessment_id, "properties": properties or {}}
        )
        return str(uuid4())

    def types(self) -> List[str]:
        return [e["event_type"] for e in self.events]


class DictCache:
    """RedisCache stand-in with the same JSON round trip."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        data = self.store.get(key)
        return json.loads(data) if data else None

    def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        self.store[key] = json.dumps(value, default=str)
        self.ttls[key] = ttl_seconds

    def delete(self, key: str) -> None:
        self.store.pop(key, None)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def assessment_repo():
    return InMemoryAssessmentRepository()


@pytest.fixture
def email_sequence_repo():
    return InMemoryEmailSequenceRepository()


@pytest.fixture
def analytics_repo():
    return InMemoryAnalyticsRepository()


@pytest.fixture
def cache():
    return DictCache()


@pytest.fixture
def assessment_service(assessment_repo, email_sequence_repo, analytics_repo, cache):
    return AssessmentService(
        variant=OPPORTUNITY_VARIANT,
        assessment_repo=assessment_repo,
        email_sequence_repo=email_sequence_repo,
        analytics_repo=analytics_repo,
        cache=cache,
        cache_ttl=120,
    )


@pytest.fixture
def sendgrid_requests():
    """Requests captured by the SendGrid mock transport."""
    return []


@pytest.fixture
def sendgrid_status():
    """HTTP status the SendGrid mock returns; override per test."""
    return 202


@pytest.fixture
def email_service(assessment_service, sendgrid_requests, sendgrid_status):
    def handler(request: httpx.Request) -> httpx.Response:
        sendgrid_requests.append(request)
        if sendgrid_status >= 400:
            return httpx.Response(sendgrid_status, json={"errors": [{"message": "rejected"}]})
        return httpx.Response(sendgrid_status)

    return EmailService(
        assessments=assessment_service,
        api_key="SG.test-key",
        from_email="info@lineablu.com",
        app_url="https://score.lineablu.com/",
        transport=httpx.MockTransport(handler),
    )


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(assessment_service, email_service):
    """TestClient with Snowflake/Redis/SendGrid replaced by in-memory fakes."""
    app.dependency_overrides[get_assessment_service] = lambda: assessment_service
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_active_variant] = lambda: OPPORTUNITY_VARIANT
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# ANSWER FIXTURES
# =============================================================================

def indices(variant, index: int) -> Dict[str, int]:
    """Same option index for every question of a variant."""
    return {q.id: index for q in variant.questions}


def options(variant, index: int):
    """Resolved AnswerOption for every question at a fixed option index."""
    return {q.id: q.options[index] for q in variant.questions}


@pytest.fixture
def opportunity():
    return OPPORTUNITY_VARIANT


@pytest.fixture
def legacy():
    return LEGACY_VARIANT


@pytest.fixture
def best_answers():
    """Opportunity variant, highest-value option for every question (index 0)."""
    return options(OPPORTUNITY_VARIANT, 0)


@pytest.fixture
def worst_answers():
    """Opportunity variant, zero-value option for every question (index 3)."""
    return options(OPPORTUNITY_VARIANT, 3)


@pytest.fixture
def submission_payload():
    return {
        "persona": "cfo",
        "answers": indices(OPPORTUNITY_VARIANT, 0),
        "email": "jane.doe@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "company_name": "Acme BV",
        "job_title": "CFO",
        "utm_source": "linkedin",
        "utm_campaign": "q3-launch",
    }
