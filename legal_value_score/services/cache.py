"""
Cache Access - Legal Value Score
legal_value_score/services/cache.py

Process-wide Redis handle used for assessment lookups (results page,
results email). Redis is optional: when REDIS_URL does not answer, callers
get None and read straight from Snowflake.
"""
import logging
from typing import Optional

import redis

from legal_value_score.config import settings
from legal_value_score.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

_cache: Optional[RedisCache] = None


def assessment_key(assessment_id: str) -> str:
    """Redis key holding one assessment record."""
    return f"assessment:{assessment_id}"


def get_cache() -> Optional[RedisCache]:
    """Shared RedisCache, or None while Redis is unreachable."""
    global _cache
    if _cache is not None:
        return _cache
    try:
        candidate = RedisCache(settings.REDIS_URL)
        candidate.client.ping()
    except (redis.RedisError, ConnectionError) as e:
        logger.warning(f"Redis unavailable, assessments will be read from Snowflake: {e}")
        return None
    _cache = candidate
    return _cache


def reset_cache() -> None:
    """Forget the shared handle; the next get_cache() reconnects."""
    global _cache
    _cache = None
