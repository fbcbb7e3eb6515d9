from pydantic import BaseModel, EmailStr, Field, StrictInt
from datetime import datetime
from typing import Dict, List, Optional, Union

from legal_value_score.models.enumerations import AnalyticsEventType, Persona


class OptionSelection(BaseModel):
    """
    Option object as sent by the front end.
    Only `text` is used to identify the option; value/category are ignored.
    """

    text: str = Field(..., min_length=1, max_length=500)
    value: Optional[int] = None
    category: Optional[str] = None


class AssessmentSubmission(BaseModel):
    """
    Request body for POST /api/assessment/submit.
    """

    persona: Persona = Field(
        default=Persona.GENERAL,
        description="Role selected on the landing page"
    )

    answers: Dict[str, Union[StrictInt, OptionSelection]] = Field(
        default_factory=dict,
        description="Question id → option index (0-3) or option object"
    )

    email: Optional[EmailStr] = Field(default=None, description="Contact email for the report")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    job_title: Optional[str] = Field(default=None, max_length=255)

    utm_source: Optional[str] = Field(default=None, max_length=255)
    utm_medium: Optional[str] = Field(default=None, max_length=255)
    utm_campaign: Optional[str] = Field(default=None, max_length=255)
    utm_content: Optional[str] = Field(default=None, max_length=255)


class RequestMetadata(BaseModel):
    """
    Request provenance captured by the submit route.
    """

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None


class ValuePotentialResponse(BaseModel):
    contract: int
    growth: int
    cost: int
    strategic: int
    total: int


class ScoresResponse(BaseModel):
    """
    Scores as returned to the front end.
    """

    total: int
    breakdown: Dict[str, int]
    tier: str
    value_potential: Optional[ValuePotentialResponse] = None


class SubmissionResponse(BaseModel):
    success: bool = True
    assessment_id: str
    scores: ScoresResponse


class EmailSendRequest(BaseModel):
    assessment_id: Optional[str] = Field(default=None, description="Assessment to send the report for")


class EmailSendResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class OptionResponse(BaseModel):
    text: str
    value: int
    category: str


class QuestionResponse(BaseModel):
    id: str
    text: str
    options: List[OptionResponse]


class QuestionBankResponse(BaseModel):
    variant: str
    title: str
    categories: Dict[str, str]
    questions: List[QuestionResponse]


class TierMetadataResponse(BaseModel):
    tier: str
    title: str
    color: str
    message: str


class AnalyticsEventRequest(BaseModel):
    event_type: AnalyticsEventType
    assessment_id: Optional[str] = None
    properties: Dict[str, Union[str, int, float, bool, None]] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
