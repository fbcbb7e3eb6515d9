"""
Analytics Router - Legal Value Score
legal_value_score/routers/analytics.py

Endpoints:
  POST /api/analytics/events   - Record a funnel event from the front end
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from legal_value_score.core.dependencies import get_assessment_service
from legal_value_score.models.assessment import AnalyticsEventRequest
from legal_value_score.services.assessment_service import AssessmentService

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.post(
    "/events",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Track an analytics event",
    description="Best effort: a storage failure is reported as recorded=false, not an error.",
)
def track_event(
    event: AnalyticsEventRequest,
    service: AssessmentService = Depends(get_assessment_service),
):
    recorded = service.track(event.event_type, event.assessment_id, event.properties)
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content={"recorded": recorded, "event_type": event.event_type.value},
    )
