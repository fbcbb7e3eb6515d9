import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# IMPORT ROUTERS
from legal_value_score.routers.assessments import router as assessments_router
from legal_value_score.routers.assessments import validation_exception_handler
from legal_value_score.routers.analytics import router as analytics_router
from legal_value_score.routers.email import router as email_router
from legal_value_score.routers.health import router as health_router
from legal_value_score.routers.questions import router as questions_router

from legal_value_score.config import get_settings
from legal_value_score.core.logging import configure_logging
from legal_value_score.scoring.score_calculator import calculator_for
from legal_value_score.scoring.variants import get_variant

load_dotenv()

logger = logging.getLogger(__name__)
settings = get_settings()


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Question Bank"},
    {"name": "Assessments"},
    {"name": "Email"},
    {"name": "Analytics"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)           # Health
app.include_router(questions_router)        # Question Bank
app.include_router(assessments_router)      # Assessments
app.include_router(email_router)            # Email
app.include_router(analytics_router)        # Analytics


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "scoring_variant": settings.SCORING_VARIANT,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging(settings)
    variant = get_variant(settings.SCORING_VARIANT)
    calculator_for(variant)
    logger.info(
        f"Starting {settings.APP_NAME} API v{settings.APP_VERSION} "
        f"(env={settings.APP_ENV}, variant={variant.name}, questions={len(variant.questions)})"
    )
    if not settings.snowflake_configured:
        logger.warning("Snowflake is not configured; submissions will fail with HTTP 500")
    if not settings.email_configured:
        logger.warning("SENDGRID_API_KEY not set; results emails will be skipped")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME} API...")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "legal_value_score.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
