"""
Services module for Legal Value Score.
"""

from legal_value_score.services.cache import get_cache, reset_cache
from legal_value_score.services.redis_cache import RedisCache
from legal_value_score.services.snowflake import get_snowflake_connection

__all__ = [
    "RedisCache",
    "get_cache",
    "get_snowflake_connection",
    "reset_cache",
]
