"""Redis client for cache state shared across workers."""

import os
import redis
import logging

logger = logging.getLogger(__name__)

# Redis connection (lazy initialization)
_redis_client = None


def get_redis(redis_url=None):
    """Get or create Redis connection. Returns None when Redis is unavailable."""
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    redis_url = redis_url or os.environ.get('REDIS_URL')

    if not redis_url:
        logger.debug("REDIS_URL not set - short-lived translation cache stays in-process")
        return None

    try:
        client = redis.from_url(redis_url, decode_responses=True)
        # Test connection
        client.ping()
        logger.info("Redis connected successfully")
        _redis_client = client
        return _redis_client
    except redis.RedisError as e:
        logger.error(f"Redis connection failed: {e}")
        return None


def reset_redis():
    """Drop the cached connection (used when the app is reconfigured)."""
    global _redis_client
    _redis_client = None
