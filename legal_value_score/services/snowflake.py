"""
Snowflake Connection Factory - Legal Value Score
legal_value_score/services/snowflake.py
"""

import snowflake.connector

from legal_value_score.config import get_settings
from legal_value_score.core.exceptions import DatabaseConnectionException


def get_snowflake_connection() -> snowflake.connector.SnowflakeConnection:
    """
    Snowflake connection factory.
    Used by BaseRepository.open_cursor(), the health check and setup_snowflake.
    """
    settings = get_settings()
    if not settings.snowflake_configured:
        raise DatabaseConnectionException(
            "Snowflake is not configured: SNOWFLAKE_ACCOUNT, SNOWFLAKE_USER and SNOWFLAKE_PASSWORD are required"
        )

    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=settings.SNOWFLAKE_PASSWORD.get_secret_value(),
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
