"""
Redis Cache - Legal Value Score
legal_value_score/services/redis_cache.py

Thin JSON wrapper over redis-py. Records are flat dicts; timestamps and
other non-JSON values are stored through str().
"""
import json
from typing import Any, Dict, Optional

import redis

from legal_value_score.config import settings


class RedisCache:
    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raw = self.client.get(key)
        return json.loads(raw) if raw else None

    def set(self, key: str, record: Dict[str, Any], ttl_seconds: int) -> None:
        """Store a record that expires after ttl_seconds."""
        self.client.setex(key, ttl_seconds, json.dumps(record, default=str))

    def delete(self, key: str) -> None:
        self.client.delete(key)
