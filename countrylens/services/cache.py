"""Expiring cache with Redis backend and in-memory fallback.

Entries are stored as JSON ``{"timestamp": <epoch ms>, "data": <payload>}``
under ``country_cache_<key>``. TTL is fixed (24h by default) and expiry is
lazy: a stale entry is deleted the first time it is read.

Graceful degradation: if Redis is not configured or unavailable, uses
cachetools.LRUCache in-memory. Write failures are never fatal; reads take
the newest copy across both media.
"""

import logging
import time
from typing import Any, Callable

from cachetools import LRUCache
from pydantic import ValidationError

from countrylens.config import settings
from countrylens.orchestrator.schemas import CacheEntry

logger = logging.getLogger(__name__)


class ExpiringCache:
    """Async key/value cache with timestamped entries."""

    def __init__(
        self,
        ttl_seconds: int | None = None,
        prefix: str | None = None,
        maxsize: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        ttl = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self.ttl_ms = ttl * 1000
        self.prefix = settings.cache_key_prefix if prefix is None else prefix
        self._clock = clock
        self._redis = None
        self._fallback: LRUCache = LRUCache(maxsize=maxsize or settings.cache_memory_maxsize)
        self._available = False

    @property
    def backend(self) -> str:
        return "redis" if self._available else "memory"

    async def connect(self, redis_url: str | None = None) -> bool:
        """Connect to Redis. Returns True on success."""
        url = redis_url or settings.redis_url
        if not url:
            logger.info("Redis not configured — using in-memory cache")
            return False
        try:
            import redis.asyncio as aioredis

            self._redis = aioredis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=3,
            )
            await self._redis.ping()
            self._available = True
            return True
        except Exception as e:
            logger.warning("Redis connection failed — using in-memory fallback: %s", str(e)[:100])
            self._redis = None
            self._available = False
            return False

    async def disconnect(self):
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            self._available = False

    def make_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def get(self, key: str) -> Any | None:
        """Return the cached payload, or None on miss / expiry."""
        storage_key = self.make_key(key)
        entry = await self._read(storage_key)
        if entry is None:
            logger.debug("Cache MISS | key=%s", storage_key)
            return None

        age_ms = self._now_ms() - entry.timestamp
        if age_ms > self.ttl_ms:
            logger.info("Cache EXPIRED | key=%s | age=%dms", storage_key, age_ms)
            await self._remove(storage_key)
            return None

        logger.info("Cache HIT (%s) | key=%s", self.backend, storage_key)
        return entry.data

    async def set(self, key: str, value: Any) -> None:
        """Write ``value`` with a fresh timestamp, overwriting any prior entry."""
        storage_key = self.make_key(key)
        try:
            raw = CacheEntry(timestamp=self._now_ms(), data=value).model_dump_json()
        except ValueError as e:
            logger.debug("Cache SET skipped — payload not serializable | key=%s | %s", storage_key, str(e)[:100])
            return

        if self._available and self._redis:
            try:
                await self._redis.set(storage_key, raw)
                logger.info("Cache SET (Redis) | key=%s", storage_key)
            except Exception as e:
                logger.debug("Redis SET error: %s", str(e)[:100])
                # Drop the older Redis copy so reads fall through to memory
                await self._remove_redis(storage_key)

        # Always write to in-memory fallback too
        try:
            self._fallback[storage_key] = raw
        except ValueError as e:
            logger.debug("Memory SET error: %s", str(e)[:100])

    async def delete(self, key: str) -> None:
        await self._remove(self.make_key(key))

    async def clear(self) -> None:
        """Delete every entry under this cache's prefix."""
        for storage_key in [k for k in self._fallback if k.startswith(self.prefix)]:
            self._fallback.pop(storage_key, None)

        if self._available and self._redis:
            try:
                keys = []
                async for k in self._redis.scan_iter(match=f"{self.prefix}*"):
                    keys.append(k)
                if keys:
                    await self._redis.delete(*keys)
                    logger.info("Cache cleared %d Redis keys", len(keys))
            except Exception as e:
                logger.debug("Redis clear error: %s", str(e)[:100])

    async def _read(self, storage_key: str) -> CacheEntry | None:
        """Newest readable copy across Redis and memory; unreadable copies are dropped."""
        entries = []

        if self._available and self._redis:
            try:
                data = await self._redis.get(storage_key)
            except Exception as e:
                logger.debug("Redis GET error: %s", str(e)[:100])
                data = None
            if data is not None:
                entry = self._parse(storage_key, data)
                if entry is None:
                    await self._remove_redis(storage_key)
                else:
                    entries.append(entry)

        data = self._fallback.get(storage_key)
        if data is not None:
            entry = self._parse(storage_key, data)
            if entry is None:
                self._fallback.pop(storage_key, None)
            else:
                entries.append(entry)

        return max(entries, key=lambda e: e.timestamp, default=None)

    def _parse(self, storage_key: str, data: str) -> CacheEntry | None:
        try:
            return CacheEntry.model_validate_json(data)
        except ValidationError:
            logger.warning("Cache entry unreadable — dropped | key=%s", storage_key)
            return None

    async def _remove_redis(self, storage_key: str) -> None:
        if self._available and self._redis:
            try:
                await self._redis.delete(storage_key)
            except Exception as e:
                logger.debug("Redis DELETE error: %s", str(e)[:100])

    async def _remove(self, storage_key: str) -> None:
        await self._remove_redis(storage_key)
        self._fallback.pop(storage_key, None)


# Singleton instance
country_cache = ExpiringCache()
