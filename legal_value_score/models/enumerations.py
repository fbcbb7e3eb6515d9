from enum import Enum

class ScoringVariantName(str, Enum):
    LEGACY = "legacy"            # Legal Impact Score (contract/risk/efficiency/strategic)
    OPPORTUNITY = "opportunity"  # Legal Value Score with value potential

class Persona(str, Enum):
    CFO = "cfo"
    GENERAL_COUNSEL = "general-counsel"
    CEO = "ceo"
    OPERATIONS = "operations"
    GENERAL = "general"          # Skipped persona selection

class EmailType(str, Enum):
    IMMEDIATE_RESULTS = "immediate_results"

class EmailStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"

class AnalyticsEventType(str, Enum):
    ASSESSMENT_STARTED = "assessment_started"
    PERSONA_SELECTED = "persona_selected"
    QUESTION_ANSWERED = "question_answered"
    ASSESSMENT_COMPLETED = "assessment_completed"
    REPORT_REQUESTED = "report_requested"
    REPORT_EMAIL_SENT = "report_email_sent"
