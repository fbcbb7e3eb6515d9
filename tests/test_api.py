# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import status
from snowflake.connector.errors import OperationalError

from legal_value_score.core.dependencies import get_assessment_service
from legal_value_score.main import app
from legal_value_score.repositories.analytics_repository import AnalyticsRepository
from legal_value_score.repositories.email_sequence_repository import EmailSequenceRepository
from legal_value_score.scoring.variants import OPPORTUNITY_VARIANT
from legal_value_score.services.assessment_service import AssessmentService



# SUBMIT ENDPOINT TESTS


class TestSubmitAssessmentEndpoint:
    """Tests for POST /api/assessment/submit endpoint."""

    def test_submit_success(self, client, submission_payload, assessment_repo):
        response = client.post("/api/assessment/submit", json=submission_payload)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["success"] is True
        assert data["assessment_id"] in assessment_repo.rows
        assert data["scores"]["total"] == 100
        assert data["scores"]["tier"] == "maximized"
        assert data["scores"]["breakdown"] == {
            "contract_opportunity": 25,
            "growth_enablement": 25,
            "cost_opportunity": 25,
            "strategic_value": 25,
        }
        assert data["scores"]["value_potential"] == {
            "contract": 30000,
            "growth": 75000,
            "cost": 30000,
            "strategic": 17500,
            "total": 152500,
        }

    def test_submit_stores_flattened_record(self, client, submission_payload, assessment_repo):
        response = client.post(
            "/api/assessment/submit",
            json=submission_payload,
            headers={
                "x-forwarded-for": "203.0.113.7, 10.0.0.1",
                "user-agent": "pytest-agent",
                "referer": "https://lineablu.com/",
            },
        )
        record = assessment_repo.rows[response.json()["assessment_id"]]

        assert record["variant"] == "opportunity"
        assert record["persona"] == "cfo"
        assert record["email"] == "jane.doe@example.com"
        assert record["company_name"] == "Acme BV"
        assert record["total_score"] == 100
        assert record["cost_opportunity_score"] == 25
        assert record["value_potential_total"] == 152500
        assert record["tier"] == "maximized"
        assert record["utm_source"] == "linkedin"
        assert record["utm_medium"] is None
        assert record["ip_address"] == "203.0.113.7"
        assert record["user_agent"] == "pytest-agent"
        assert record["referrer"] == "https://lineablu.com/"
        assert record["email_sent"] is False
        assert record["answers"]["q1"]["text"] == "Yes, comprehensive system"

    def test_submit_real_ip_fallback(self, client, submission_payload, assessment_repo):
        response = client.post(
            "/api/assessment/submit", json=submission_payload, headers={"x-real-ip": "198.51.100.2"}
        )
        record = assessment_repo.rows[response.json()["assessment_id"]]
        assert record["ip_address"] == "198.51.100.2"

    def test_submit_schedules_email_and_tracks(self, client, submission_payload, email_sequence_repo, analytics_repo):
        response = client.post("/api/assessment/submit", json=submission_payload)
        assessment_id = response.json()["assessment_id"]

        assert email_sequence_repo.scheduled == [
            {"assessment_id": assessment_id, "email_number": 1, "email_type": "immediate_results"}
        ]
        assert analytics_repo.types() == ["assessment_completed"]
        assert analytics_repo.events[0]["properties"]["tier"] == "maximized"

    def test_submit_without_email_skips_sequence(self, client, email_sequence_repo):
        response = client.post("/api/assessment/submit", json={"answers": {"q1": 3, "q2": 3}})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["scores"]["tier"] == "transformational"
        assert email_sequence_repo.scheduled == []

    def test_submit_option_objects(self, client):
        response = client.post(
            "/api/assessment/submit",
            json={"answers": {"q3": {"text": "Under 25%", "value": 0, "category": "growth_enablement"}}},
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["scores"]["breakdown"]["cost_opportunity"] == 25

    @pytest.mark.parametrize("body", [{}, {"answers": {}}])
    def test_submit_missing_answers(self, client, body):
        response = client.post("/api/assessment/submit", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error_code"] == "ANSWERS_REQUIRED"
        assert data["message"] == "Answers are required"

    def test_submit_unknown_question(self, client):
        response = client.post("/api/assessment/submit", json={"answers": {"q42": 0}})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["question_id"] == "q42"

    def test_submit_unknown_option(self, client):
        response = client.post("/api/assessment/submit", json={"answers": {"q1": 9}})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_code"] == "INVALID_ANSWER"

    def test_submit_invalid_email(self, client):
        response = client.post(
            "/api/assessment/submit", json={"answers": {"q1": 0}, "email": "jane@"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Email must be a valid email address"

    def test_submit_invalid_persona(self, client):
        response = client.post(
            "/api/assessment/submit", json={"answers": {"q1": 0}, "persona": "intern"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "Persona must be one of" in response.json()["message"]

    def test_submit_malformed_json(self, client):
        response = client.post(
            "/api/assessment/submit",
            content="{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"

    def test_submit_storage_failure(self, client, submission_payload, assessment_repo):
        assessment_repo.fail = True
        response = client.post("/api/assessment/submit", json=submission_payload)
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Failed to submit assessment"

    def test_submit_survives_sequence_and_analytics_failures(
        self, client, submission_payload, email_sequence_repo, analytics_repo
    ):
        email_sequence_repo.fail = True
        analytics_repo.fail = True
        response = client.post("/api/assessment/submit", json=submission_payload)
        assert response.status_code == status.HTTP_200_OK

    def test_submit_survives_snowflake_outage_after_save(self, client, submission_payload, assessment_repo, cache):
        """Sequence and analytics writes hit Snowflake after the assessment row is stored."""
        service = AssessmentService(
            OPPORTUNITY_VARIANT,
            assessment_repo,
            EmailSequenceRepository(),
            AnalyticsRepository(),
            cache=cache,
        )
        app.dependency_overrides[get_assessment_service] = lambda: service

        with patch(
            "legal_value_score.repositories.base.get_snowflake_connection",
            side_effect=OperationalError("250003: Failed to get the response. Hanging?"),
        ):
            response = client.post("/api/assessment/submit", json=submission_payload)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["assessment_id"] in assessment_repo.rows
        assert len(assessment_repo.rows) == 1

    def test_submit_without_body(self, client):
        response = client.post("/api/assessment/submit")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["message"] == "Request body is required"
        assert data["details"] is None

    def test_submit_non_object_body(self, client):
        response = client.post("/api/assessment/submit", json=[{"q1": 0}])
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Request body must be a JSON object"



# EMAIL ENDPOINT TESTS


class TestSendEmailEndpoint:
    """Tests for POST /api/email/send endpoint."""

    def test_send_success(self, client, submission_payload, assessment_repo, sendgrid_requests):
        assessment_id = client.post("/api/assessment/submit", json=submission_payload).json()["assessment_id"]

        response = client.post("/api/email/send", json={"assessment_id": assessment_id})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        assert len(sendgrid_requests) == 1
        assert assessment_repo.rows[assessment_id]["email_sent"] is True

    @pytest.mark.parametrize("body", [{}, {"assessment_id": ""}, {"assessment_id": "   "}])
    def test_send_missing_id(self, client, body):
        response = client.post("/api/email/send", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Assessment ID is required"

    def test_send_unknown_assessment(self, client):
        response = client.post("/api/email/send", json={"assessment_id": "does-not-exist"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_send_without_email_address(self, client):
        assessment_id = client.post(
            "/api/assessment/submit", json={"answers": {"q1": 0}}
        ).json()["assessment_id"]
        response = client.post("/api/email/send", json={"assessment_id": assessment_id})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "No email address provided"

    def test_send_not_configured(self, client, submission_payload, email_service, sendgrid_requests):
        email_service.api_key = None
        assessment_id = client.post("/api/assessment/submit", json=submission_payload).json()["assessment_id"]

        response = client.post("/api/email/send", json={"assessment_id": assessment_id})
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": False, "message": "Email service not configured"}
        assert sendgrid_requests == []

    @pytest.mark.parametrize("sendgrid_status", [500])
    def test_send_provider_failure(self, client, submission_payload, assessment_repo):
        assessment_id = client.post("/api/assessment/submit", json=submission_payload).json()["assessment_id"]

        response = client.post("/api/email/send", json={"assessment_id": assessment_id})
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Failed to send email"
        assert assessment_repo.rows[assessment_id]["email_sent"] is False



# QUESTION BANK / TIER ENDPOINT TESTS


class TestQuestionBankEndpoints:

    def test_get_questions(self, client):
        response = client.get("/api/v1/questions")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["variant"] == "opportunity"
        assert data["title"] == "Legal Value Score"
        assert len(data["questions"]) == 8
        assert data["categories"]["cost_opportunity"] == "Cost Optimization"
        assert data["questions"][0]["options"][0] == {
            "text": "Yes, comprehensive system",
            "value": 4,
            "category": "contract_opportunity",
        }

    def test_get_tier(self, client):
        response = client.get("/api/v1/tiers/strong-foundation")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "STRONG FOUNDATION"
        assert response.json()["color"] == "yellow"

    def test_get_unknown_tier(self, client):
        response = client.get("/api/v1/tiers/legendary")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "TIER_NOT_FOUND"



# ANALYTICS ENDPOINT TESTS


class TestAnalyticsEndpoint:

    def test_track_event(self, client, analytics_repo):
        response = client.post(
            "/api/analytics/events",
            json={"event_type": "persona_selected", "properties": {"persona": "cfo"}},
        )
        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json()["recorded"] is True
        assert analytics_repo.events[-1]["properties"] == {"persona": "cfo"}

    def test_track_event_storage_failure(self, client, analytics_repo):
        analytics_repo.fail = True
        response = client.post("/api/analytics/events", json={"event_type": "assessment_started"})
        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json()["recorded"] is False

    def test_track_unknown_event(self, client):
        response = client.post("/api/analytics/events", json={"event_type": "page_scrolled"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY



# HEALTH / ROOT ENDPOINT TESTS


class TestHealthEndpoint:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health_all_healthy(self, client):
        conn = MagicMock()
        conn.cursor.return_value.fetchone.return_value = ("SVC_USER", 42)
        cache = MagicMock()

        with patch("legal_value_score.routers.health.get_snowflake_connection", return_value=conn), \
             patch("legal_value_score.routers.health.get_cache", return_value=cache):
            response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["snowflake"] == "healthy (User: SVC_USER, assessments: 42)"
        assert data["dependencies"]["redis"] == "healthy"
        assert data["dependencies"]["scoring"] == "healthy (opportunity, 8 questions)"
        conn.close.assert_called_once()

    def test_health_degraded(self, client):
        with patch(
            "legal_value_score.routers.health.get_snowflake_connection",
            side_effect=Exception("Snowflake is not configured"),
        ), patch("legal_value_score.routers.health.get_cache", return_value=None):
            response = client.get("/health")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["snowflake"].startswith("unhealthy")
        assert data["dependencies"]["redis"].startswith("unhealthy")

    def test_redis_outage_is_not_fatal(self, client):
        conn = MagicMock()
        conn.cursor.return_value.fetchone.return_value = ("SVC_USER", 0)

        with patch("legal_value_score.routers.health.get_snowflake_connection", return_value=conn), \
             patch("legal_value_score.routers.health.get_cache", return_value=None):
            response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "degraded"

    def test_single_service(self, client):
        with patch("legal_value_score.routers.health.get_cache", return_value=MagicMock()):
            response = client.get("/health/redis")
        assert response.json()["is_healthy"] is True

    def test_unknown_service(self, client):
        response = client.get("/health/kafka")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "SERVICE_NOT_FOUND"
