"""
Assessment Router - Legal Value Score
legal_value_score/routers/assessments.py

Endpoints:
  POST /api/assessment/submit   - Score a completed questionnaire and store it

Also provides the shared error envelope and the RequestValidationError handler
registered in main.py.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from legal_value_score.core.dependencies import get_assessment_service
from legal_value_score.core.exceptions import (
    AnswerValidationError,
    EmptyAnswerSetError,
    RepositoryException,
)
from legal_value_score.models.assessment import (
    AssessmentSubmission,
    ErrorResponse,
    RequestMetadata,
    SubmissionResponse,
)
from legal_value_score.services.assessment_service import AssessmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assessment", tags=["Assessments"])


#  Custom Exception Handlers
# Registered in main.py: app.add_exception_handler(RequestValidationError, validation_exception_handler)

FIELD_MESSAGES = {
    "persona": {
        "enum": "Persona must be one of: cfo, general-counsel, ceo, operations, general",
    },
    "email": {
        "value_error": "Email must be a valid email address",
    },
    "assessment_id": {
        "string_type": "Assessment ID must be a string",
    },
    "event_type": {
        "missing": "Event type is required",
        "enum": "Event type is not recognised",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "model_type": "Field '{field}' must be an object",
    "dict_type": "Field '{field}' must be an object",
    "string_type": "Field '{field}' must be a string",
    "enum": "Field '{field}' has an invalid value",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    top_level = field.split(".")[0]
    if top_level in FIELD_MESSAGES:
        field_msgs = FIELD_MESSAGES[top_level]
        for key in field_msgs:
            if key in error_type:
                return field_msgs[key]

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", "Request validation failed"
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Malformed JSON request body"
        )

    field = ".".join(str(l) for l in loc if l != "body")
    if not field:
        message = "Request body is required" if error_type == "missing" else "Request body must be a JSON object"
    else:
        message = get_validation_message(field, error_type)

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        message,
        {"field": field, "type": error_type} if field else None,
    )


def request_metadata(request: Request) -> RequestMetadata:
    forwarded = request.headers.get("x-forwarded-for")
    ip_address = forwarded.split(",")[0].strip() if forwarded else request.headers.get("x-real-ip")
    return RequestMetadata(
        ip_address=ip_address or None,
        user_agent=request.headers.get("user-agent"),
        referrer=request.headers.get("referer"),
    )


#  Routes

@router.post(
    "/submit",
    response_model=SubmissionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Answers missing"},
        422: {"model": ErrorResponse, "description": "Unknown question or option"},
        500: {"model": ErrorResponse, "description": "Assessment could not be stored"},
    },
    summary="Submit a completed assessment",
)
def submit_assessment(
    submission: AssessmentSubmission,
    request: Request,
    service: AssessmentService = Depends(get_assessment_service),
):
    try:
        assessment_id, result = service.submit(submission, request_metadata(request))
    except EmptyAnswerSetError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "ANSWERS_REQUIRED", e.message)
    except AnswerValidationError as e:
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "INVALID_ANSWER",
            str(e),
            {"question_id": e.question_id, "reason": e.reason},
        )
    except RepositoryException as e:
        logger.error(f"Error submitting assessment: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "SUBMISSION_FAILED", "Failed to submit assessment"
        )

    return SubmissionResponse(assessment_id=assessment_id, scores=result.to_dict())
