"""
Redis caching service for item search.

CACHING STRATEGY
================

What we cache:
  - Item search responses (paginated, JSON-serialized)
  - Cache key pattern: "items:search:text={text}&page={index}&size={size}"

Invalidation strategy:
  - Any item write (create, update, delete) can change what a search returns,
    so every write deletes all "items:search:*" keys
  - TTL-based expiry as safety net (5 minutes by default)

Redis is optional: when disabled or unreachable every call degrades to a
cache miss and the database answers.

Bookings are never cached; their status changes under the owner's hand.
"""

import json
from typing import Optional

import redis.asyncio as redis
from shareit.core.config import get_settings
from shareit.core.logging import get_logger
from shareit.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

SEARCH_KEY_PREFIX = "items:search:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            # Test connection
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.close()
        _redis_client = None


def _make_search_key(text: str, page_index: int, size: int) -> str:
    return f"{SEARCH_KEY_PREFIX}text={text.lower()}&page={page_index}&size={size}"


async def get_cached_search(text: str, page_index: int, size: int) -> Optional[list]:
    """Retrieve a cached item search result."""
    client = await get_redis()
    if not client:
        return None

    key = _make_search_key(text, page_index, size)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=data is not None)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_search(text: str, page_index: int, size: int, data: list) -> None:
    """Cache an item search result with TTL."""
    client = await get_redis()
    if not client:
        return

    key = _make_search_key(text, page_index, size)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        record_cache_operation("set", hit=False)
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_item_search_cache() -> None:
    """
    Invalidate all cached item searches.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{SEARCH_KEY_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        keyspace = await client.info("keyspace")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
            "keys": keyspace,
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
