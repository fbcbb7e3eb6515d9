"""
Health Check Router - Legal Value Score
legal_value_score/routers/health.py

Snowflake is required (submissions and emails fail without it), Redis is
optional (assessment reads fall back to Snowflake), and the scoring
variant must load. /health answers 503 only when a required check fails.
"""
from datetime import datetime, timezone
from typing import Callable, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from legal_value_score.config import get_settings
from legal_value_score.routers.assessments import error_response
from legal_value_score.scoring.variants import get_variant
from legal_value_score.services.cache import get_cache
from legal_value_score.services.snowflake import get_snowflake_connection

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    scoring_variant: str
    dependencies: Dict[str, str]
    email: str


def _short(e: Exception) -> str:
    msg = str(e)
    return msg[:100] + "..." if len(msg) > 100 else msg


def check_snowflake() -> str:
    """Connect and count stored assessments (fails if setup_snowflake has not run)."""
    try:
        conn = get_snowflake_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT CURRENT_USER(), (SELECT COUNT(*) FROM ASSESSMENTS)")
            user, assessments = cursor.fetchone()
            cursor.close()
        finally:
            conn.close()
    except Exception as e:
        return f"unhealthy: {_short(e)}"
    return f"healthy (User: {user}, assessments: {assessments})"


def check_redis() -> str:
    cache = get_cache()
    if cache is None:
        return "unhealthy: Redis not configured or unreachable"
    try:
        cache.client.ping()
    except Exception as e:
        return f"unhealthy: {_short(e)}"
    return "healthy"


def check_scoring() -> str:
    try:
        variant = get_variant(get_settings().SCORING_VARIANT)
    except Exception as e:
        return f"unhealthy: {_short(e)}"
    return f"healthy ({variant.name}, {len(variant.questions)} questions)"


CHECKS: Dict[str, Callable[[], str]] = {
    "snowflake": check_snowflake,
    "redis": check_redis,
    "scoring": check_scoring,
}
REQUIRED = ("snowflake", "scoring")


def _healthy(result: str) -> bool:
    return result.startswith("healthy")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Required dependencies healthy (Redis may be degraded)"},
        503: {"description": "Snowflake or the scoring configuration is unhealthy"},
    },
    summary="Health check",
    description="Check Snowflake, Redis and the active scoring variant; reports whether SendGrid is configured.",
)
def health_check():
    settings = get_settings()
    dependencies = {name: check() for name, check in CHECKS.items()}

    required_ok = all(_healthy(dependencies[name]) for name in REQUIRED)
    all_ok = required_ok and all(_healthy(result) for result in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_ok else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        scoring_variant=settings.SCORING_VARIANT,
        dependencies=dependencies,
        email="configured" if settings.email_configured else "not configured",
    )

    if required_ok:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get("/health/{service}", summary="Check a single dependency")
def health_service(service: str):
    check = CHECKS.get(service)
    if check is None:
        return error_response(
            status.HTTP_404_NOT_FOUND,
            "SERVICE_NOT_FOUND",
            f"Unknown health check '{service}'",
            {"available": list(CHECKS)},
        )
    result = check()
    return {
        "service": service,
        "status": result,
        "is_healthy": _healthy(result),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
