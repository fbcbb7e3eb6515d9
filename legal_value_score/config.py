"""Application configuration with comprehensive validation."""
from typing import List, Optional, Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from legal_value_score.models.enumerations import ScoringVariantName


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        use_enum_values=True,
    )

    # Application
    APP_NAME: str = "LineaBlu Legal Value Score"
    APP_VERSION: str = "2.1.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Scoring
    SCORING_VARIANT: ScoringVariantName = Field(default=ScoringVariantName.OPPORTUNITY, validate_default=True)
    CURRENCY_SYMBOL: str = Field(default="€", min_length=1, max_length=3)

    # Snowflake
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_ASSESSMENT: int = Field(default=120, ge=0, le=86400)

    # Email (SendGrid)
    SENDGRID_API_KEY: Optional[SecretStr] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    EMAIL_FROM: str = "info@lineablu.com"
    EMAIL_TIMEOUT_SECONDS: float = Field(default=15.0, gt=0, le=120)
    PUBLIC_APP_URL: str = "http://localhost:8501"

    # API
    CORS_ORIGINS: List[str] = ["http://localhost:8501"]

    @field_validator("SENDGRID_API_KEY")
    @classmethod
    def validate_sendgrid_key(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        if v is not None and not v.get_secret_value().startswith("SG."):
            raise ValueError("Invalid SendGrid API key format")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required security settings."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        if self.APP_ENV == "production" and "*" in self.CORS_ORIGINS:
            raise ValueError("CORS_ORIGINS must list explicit origins in production")
        return self

    @property
    def snowflake_configured(self) -> bool:
        return bool(self.SNOWFLAKE_ACCOUNT and self.SNOWFLAKE_USER and self.SNOWFLAKE_PASSWORD)

    @property
    def email_configured(self) -> bool:
        return self.SENDGRID_API_KEY is not None


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
