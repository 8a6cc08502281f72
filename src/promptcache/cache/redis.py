"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/redis.py.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from .base import CacheItem, ComputeFn, TagAwareCache, run_compute

logger = logging.getLogger("promptcache.cache.redis")


class RedisTagAwareCache(TagAwareCache):
    """
    Redis-backed tag-aware cache for multi-process deployments.

    Uses:
    - Redis string (``{prefix}:entry:{key}``) holding the JSON-encoded value
    - Redis set (``{prefix}:tag:{tag}``) holding the keys carrying each tag

    An entry and its tag memberships are written in one MULTI/EXEC
    transaction. Tag sets expire no earlier than the entries they list.

    Values must be JSON-serializable. There is no cross-process single-flight:
    concurrent misses on one key may each compute, and the last write wins.

    Requires ``redis.asyncio`` (``pip install redis``).

    Args:
        redis: An ``redis.asyncio.Redis`` client instance.
        prefix: Key prefix for namespacing.
        default_ttl_s: Expiry applied when a compute declares none.
    """

    def __init__(
        self,
        redis: Any,
        *,
        prefix: str = "promptcache",
        default_ttl_s: float | None = None,
        backend_id: str = "redis",
    ) -> None:
        self.backend_id = backend_id
        self._redis = redis
        self._prefix = prefix
        self._default_ttl_s = default_ttl_s

    def _entry_key(self, key: str) -> str:
        """Redis key storing one serialized value."""
        return f"{self._prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        """Redis set key listing entry keys carrying `tag`."""
        return f"{self._prefix}:tag:{tag}"

    async def _load(self, key: str) -> tuple[bool, Any]:
        blob = await self._redis.get(self._entry_key(key))
        if blob is None:
            return False, None
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            return True, json.loads(blob)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache row for key %s", key)
            return False, None

    async def get_or_compute(self, key: str, compute: ComputeFn[Any]) -> Any:
        found, value = await self._load(key)
        if found:
            return value

        item = CacheItem(key, default_ttl_s=self._default_ttl_s)
        value = await run_compute(compute, item)

        blob = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        ttl_s = None if item.ttl_s is None else max(1, int(item.ttl_s))
        tag_expiries = {
            tag: await self._tag_expiry(self._tag_key(tag), ttl_s) for tag in item.tags
        }

        async with self._redis.pipeline(transaction=True) as pipe:
            if ttl_s is None:
                pipe.set(self._entry_key(key), blob)
            else:
                pipe.set(self._entry_key(key), blob, ex=ttl_s)
            for tag, expiry in tag_expiries.items():
                tag_key = self._tag_key(tag)
                pipe.sadd(tag_key, key)
                if expiry is None:
                    pipe.persist(tag_key)
                else:
                    pipe.expire(tag_key, expiry)
            await pipe.execute()
        return value

    async def _tag_expiry(self, tag_key: str, ttl_s: int | None) -> int | None:
        """
        Expiry for a tag set about to gain an entry living `ttl_s` seconds.

        A tag set must outlive every entry it lists, so it never shrinks its
        current expiry and stays persistent once it lists a persistent entry.
        """
        if ttl_s is None:
            return None
        current = int(await self._redis.ttl(tag_key))
        if current == -1:
            return None
        return max(current, ttl_s)

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._entry_key(key))

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        removed = 0
        for tag in tags:
            tag_key = self._tag_key(tag)
            members = await self._redis.smembers(tag_key)
            keys = [
                self._entry_key(m.decode("utf-8") if isinstance(m, bytes) else m)
                for m in members
            ]
            if keys:
                removed += int(await self._redis.delete(*keys))
            await self._redis.delete(tag_key)
            logger.debug("Invalidated tag %s (%d keys)", tag, len(keys))
        return removed

    async def clear(self) -> None:
        async for redis_key in self._redis.scan_iter(match=f"{self._prefix}:*"):
            await self._redis.delete(redis_key)
