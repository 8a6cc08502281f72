"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-aside decorator around a generative-AI platform.
"""

from __future__ import annotations

import logging
from typing import Any

from .cache.base import CacheItem, TagAwareCache
from .clock import Clock, SystemClock, timestamp
from .codec import ResultCodec
from .contracts import ModelCatalog, Platform
from .deferred import DeferredResult, InMemoryRawResult, PlainConverter
from .entry import CacheEntry
from .errors import PromptCacheError
from .keys import CacheKeyBuilder, CacheKeyPlan, camel
from .types import (
    CACHE_KEY_METADATA_KEY,
    CACHED_AT_METADATA_KEY,
    CACHED_METADATA_KEY,
    InvocationInput,
    InvocationOptions,
)
from .utils import resolve, run_sync

logger = logging.getLogger("promptcache.platform")


class CachePlatform:
    """
    Platform decorator memoizing invocation results in a tag-aware cache.

    A call is cached only when a store is configured and the call carries a
    non-empty `prompt_cache_key` option; otherwise it is delegated verbatim.
    Cached entries are tagged with the camel-cased model id so every entry of
    one model can be invalidated at once.
    """

    def __init__(
        self,
        platform: Platform,
        *,
        cache: TagAwareCache | None = None,
        clock: Clock | None = None,
        codec: ResultCodec | None = None,
        cache_key: str | None = None,
        cache_ttl_s: int | None = None,
    ) -> None:
        self._platform = platform
        self._cache = cache
        self._clock = clock or SystemClock()
        self._codec = codec or ResultCodec()
        self._keys = CacheKeyBuilder(default_key=cache_key, default_ttl_s=cache_ttl_s)

    @property
    def cache(self) -> TagAwareCache | None:
        return self._cache

    async def invoke(
        self,
        model: str,
        input: InvocationInput,
        options: InvocationOptions | None = None,
    ) -> DeferredResult:
        """
        Invoke `model`, serving the result from cache when possible.

        Every result served through the cache, fresh or not, carries
        `cached`, `cache_key` and `cached_at` metadata. Errors raised by the
        wrapped platform or by the store propagate unchanged; a failed call is
        never stored.
        """
        plan = self._keys.build(model, input, options) if self._cache is not None else None
        if plan is None:
            logger.debug("Prompt cache bypassed for model %s", model)
            return await resolve(self._platform.invoke(model, input, options))

        computed = False

        async def _compute(item: CacheItem) -> dict[str, Any]:
            nonlocal computed
            computed = True
            item.tag(plan.tag)
            if plan.ttl_s is not None:
                item.expires_after(plan.ttl_s)
            return await self._compute_entry(model, input, plan)

        row = await self._cache.get_or_compute(plan.key, _compute)
        entry = CacheEntry.from_dict(row)
        logger.debug(
            "Prompt cache %s for key %s (cached_at=%d)",
            "miss" if computed else "hit",
            entry.cache_key,
            entry.cached_at,
        )

        restored = self._codec.decode(entry.result)
        restored.metadata.set(
            {
                **entry.metadata,
                CACHED_METADATA_KEY: True,
                CACHE_KEY_METADATA_KEY: entry.cache_key,
                CACHED_AT_METADATA_KEY: entry.cached_at,
            }
        )

        result = DeferredResult(
            PlainConverter(restored),
            InMemoryRawResult(entry.raw_data),
            plan.options,
        )
        result.metadata.merge(restored.metadata)
        return result

    def invoke_sync(
        self,
        model: str,
        input: InvocationInput,
        options: InvocationOptions | None = None,
    ) -> DeferredResult:
        """Synchronous wrapper around `invoke`."""
        return run_sync(self.invoke(model, input, options))

    async def _compute_entry(
        self,
        model: str,
        input: InvocationInput,
        plan: CacheKeyPlan,
    ) -> dict[str, Any]:
        """Call the wrapped platform and snapshot its outcome as a cache row."""
        deferred = await resolve(self._platform.invoke(model, input, plan.options))
        result = deferred.result
        entry = CacheEntry(
            result=self._codec.encode(result),
            raw_data=deferred.raw_result.data,
            metadata=result.metadata.all(),
            cached_at=timestamp(self._clock),
            cache_key=plan.key,
        )
        return entry.to_dict()

    async def invalidate_model(self, model: str) -> int:
        """Drop every cached entry produced by `model`."""
        if self._cache is None:
            raise PromptCacheError("No cache store configured")
        removed = await self._cache.invalidate_tags([camel(model)])
        logger.debug("Invalidated %d cached entries for model %s", removed, model)
        return removed

    def get_model_catalog(self) -> ModelCatalog:
        return self._platform.get_model_catalog()
