"""Redis cache decorator for record store methods.

Caches JSON-serializable results with a TTL so repeated map loads do not
rescan the air quality table. A Redis outage only costs the cache.
"""

import functools
import hashlib
import json
import logging
from typing import Any, Callable

import redis.asyncio as redis

from breathewatch.config import settings

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


async def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


def _cache_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """Generate a deterministic cache key from function arguments."""
    raw = json.dumps({"args": [str(a) for a in args], "kwargs": {k: str(v) for k, v in kwargs.items()}}, sort_keys=True)
    h = hashlib.sha256(raw.encode()).hexdigest()[:16]
    return f"breathewatch:{prefix}:{h}"


def cached(prefix: str, ttl_seconds: int | None = None):
    """Cache decorator for async store methods.

    Args:
        prefix: Cache key prefix (e.g., "air_quality:map")
        ttl_seconds: Time-to-live in seconds (default settings.map_cache_ttl_seconds)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = _cache_key(prefix, *args[1:], **kwargs)  # Skip self
            try:
                r = await get_redis()
                cached_value = await r.get(key)
                if cached_value is not None:
                    logger.debug("Cache hit: %s", key)
                    return json.loads(cached_value)
            except Exception:
                logger.warning("Redis unavailable, skipping cache for %s", key)

            result = await func(*args, **kwargs)

            try:
                r = await get_redis()
                await r.setex(key, ttl_seconds or settings.map_cache_ttl_seconds, json.dumps(result, default=str))
            except Exception:
                logger.warning("Failed to write cache for %s", key)

            return result
        return wrapper
    return decorator


async def invalidate(prefix: str) -> None:
    """Drop every cached entry under a prefix (after writes)."""
    try:
        r = await get_redis()
        async for key in r.scan_iter(match=f"breathewatch:{prefix}:*"):
            await r.delete(key)
    except Exception:
        logger.warning("Failed to invalidate cache prefix %s", prefix)
