"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from ..clock import Clock, SystemClock
from .base import CacheItem, CacheRow, ComputeFn, TagAwareCache, run_compute
from .coalescing import RequestCoalescer

logger = logging.getLogger("promptcache.cache.inmemory")


class InMemoryTagAwareCache(TagAwareCache):
    """
    Process-local tag-aware cache suitable for development/test workloads.

    Expiry is measured on the injected clock. Values are deep-copied on write
    and on read, so callers never share state with stored rows. Concurrent
    misses on the same key within one event loop share a single computation.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        default_ttl_s: float | None = None,
        backend_id: str = "inmemory",
    ) -> None:
        self.backend_id = backend_id
        self._clock = clock or SystemClock()
        self._default_ttl_s = default_ttl_s
        self._rows: dict[str, CacheRow] = {}
        self._coalescer = RequestCoalescer()

    def _now_s(self) -> float:
        return self._clock.now().timestamp()

    def _lookup(self, key: str) -> CacheRow | None:
        row = self._rows.get(key)
        if row is None:
            return None
        if row.is_expired(self._now_s()):
            self._rows.pop(key, None)
            return None
        return row

    async def get_or_compute(self, key: str, compute: ComputeFn[Any]) -> Any:
        row = self._lookup(key)
        if row is not None:
            return copy.deepcopy(row.value)

        async def _compute_and_store() -> Any:
            item = CacheItem(key, default_ttl_s=self._default_ttl_s)
            value = await run_compute(compute, item)
            ttl_s = item.ttl_s
            self._rows[key] = CacheRow(
                value=copy.deepcopy(value),
                expires_at_s=None if ttl_s is None else self._now_s() + ttl_s,
                tags=item.tags,
            )
            return value

        return copy.deepcopy(await self._coalescer.run(key, _compute_and_store))

    async def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        wanted = set(tags)
        doomed = [key for key, row in self._rows.items() if wanted.intersection(row.tags)]
        for key in doomed:
            self._rows.pop(key, None)
        logger.debug("Invalidated %d entries for tags %s", len(doomed), sorted(wanted))
        return len(doomed)

    async def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)
