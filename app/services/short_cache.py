"""Short-lived translation cache in front of the persistent cache.

Process-wide state: created on first use, filled on writes and purged
by the background sweeper. Backed by Redis when REDIS_URL is set so all
workers share it, otherwise by an in-process dict.
"""
import json
import logging
import threading
import time

import redis
from flask import current_app, has_app_context

from app.services.redis_client import get_redis, reset_redis

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60
KEY_PREFIX = 'translation:short:'


def make_key(text: str, target_language: str, source_language: str = 'auto') -> str:
    return f'{source_language}-{target_language}-{text}'


class MemoryCache:
    """Thread-safe key -> (value, timestamp) map with a TTL.

    Concurrent writers race, last write wins.
    """

    def __init__(self, ttl: int = DEFAULT_TTL, clock=time.time):
        self.ttl = ttl
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at >= self.ttl:
            return None
        return value

    def set(self, key, value):
        with self._lock:
            self._entries[key] = (value, self._clock())

    def purge_expired(self) -> int:
        """Remove entries older than the TTL. Returns how many were dropped."""
        now = self._clock()
        with self._lock:
            stale = [k for k, (_, stored_at) in self._entries.items() if now - stored_at >= self.ttl]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._entries)


class RedisCache:
    """Same interface as MemoryCache, values stored as JSON with SETEX."""

    def __init__(self, client, ttl: int = DEFAULT_TTL):
        self.client = client
        self.ttl = ttl

    def get(self, key):
        try:
            raw = self.client.get(KEY_PREFIX + key)
        except redis.RedisError as e:
            logger.warning(f"Redis short cache get error: {e}")
            return None
        return json.loads(raw) if raw else None

    def set(self, key, value):
        try:
            self.client.setex(KEY_PREFIX + key, self.ttl, json.dumps(value))
        except redis.RedisError as e:
            logger.warning(f"Redis short cache set error: {e}")

    def purge_expired(self) -> int:
        # Redis expires keys on its own
        return 0


_short_cache = None
_short_cache_lock = threading.Lock()


def get_short_cache(ttl: int = None, redis_url=None):
    """Return the process-wide short-lived cache, creating it on first use.

    Inside an app context the TTL and Redis URL default to SHORT_CACHE_TTL
    and REDIS_URL. An explicit or configured TTL also applies to a cache
    that already exists.
    """
    global _short_cache

    if has_app_context():
        ttl = ttl or current_app.config.get('SHORT_CACHE_TTL')
        redis_url = redis_url or current_app.config.get('REDIS_URL')

    with _short_cache_lock:
        if _short_cache is None:
            client = get_redis(redis_url)
            cache_ttl = ttl or DEFAULT_TTL
            _short_cache = RedisCache(client, cache_ttl) if client is not None else MemoryCache(cache_ttl)
        elif ttl:
            _short_cache.ttl = ttl
        return _short_cache


def reset_short_cache():
    global _short_cache
    with _short_cache_lock:
        _short_cache = None
    reset_redis()
