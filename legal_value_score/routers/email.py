"""
Email Router - Legal Value Score
legal_value_score/routers/email.py

Endpoints:
  POST /api/email/send   - Send the results report for a stored assessment
"""

import logging

from fastapi import APIRouter, Depends, status

from legal_value_score.core.dependencies import get_email_service
from legal_value_score.core.exceptions import (
    EmailDeliveryException,
    EntityNotFoundException,
    MissingEmailAddressException,
    RepositoryException,
)
from legal_value_score.models.assessment import (
    EmailSendRequest,
    EmailSendResponse,
    ErrorResponse,
)
from legal_value_score.routers.assessments import error_response
from legal_value_score.services.email_service import EmailService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/email", tags=["Email"])


@router.post(
    "/send",
    response_model=EmailSendResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing assessment ID or email address"},
        404: {"model": ErrorResponse, "description": "Assessment not found"},
        500: {"model": ErrorResponse, "description": "Email could not be sent"},
    },
    summary="Send the results email",
    description="Returns success=false (HTTP 200) when SendGrid is not configured.",
)
def send_results_email(
    body: EmailSendRequest,
    service: EmailService = Depends(get_email_service),
):
    assessment_id = (body.assessment_id or "").strip()
    if not assessment_id:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "ASSESSMENT_ID_REQUIRED", "Assessment ID is required"
        )

    try:
        result = service.send_results(assessment_id)
    except EntityNotFoundException:
        return error_response(
            status.HTTP_404_NOT_FOUND,
            "ASSESSMENT_NOT_FOUND",
            "Assessment not found",
            {"assessment_id": assessment_id},
        )
    except MissingEmailAddressException as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "EMAIL_REQUIRED", str(e))
    except (EmailDeliveryException, RepositoryException) as e:
        logger.error(f"Error sending email for assessment {assessment_id}: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "EMAIL_SEND_FAILED", "Failed to send email"
        )

    return EmailSendResponse(**result)
