"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class CacheItem:
    """
    Mutable descriptor handed to a compute callback on cache miss.

    The callback declares tags and expiry here; the store applies them when
    persisting the computed value.
    """

    __slots__ = ("key", "_tags", "_ttl_s")

    def __init__(self, key: str, *, default_ttl_s: float | None = None) -> None:
        self.key = key
        self._tags: list[str] = []
        self._ttl_s = default_ttl_s

    def tag(self, *names: str) -> "CacheItem":
        for name in names:
            if not name:
                raise ValueError("Cache tag must be non-empty")
            if name not in self._tags:
                self._tags.append(name)
        return self

    def expires_after(self, seconds: float | None) -> "CacheItem":
        """Set a relative TTL; `None` keeps the store default."""
        if seconds is not None and seconds <= 0:
            raise ValueError(f"TTL must be positive, got {seconds}")
        self._ttl_s = seconds
        return self

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    @property
    def ttl_s(self) -> float | None:
        return self._ttl_s


ComputeFn = Callable[[CacheItem], Awaitable[T] | T]


@dataclass(frozen=True, slots=True)
class CacheRow:
    """One stored value with expiration and tag metadata."""

    value: Any
    expires_at_s: float | None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def is_expired(self, now_s: float) -> bool:
        return self.expires_at_s is not None and self.expires_at_s <= now_s


class TagAwareCache(Protocol):
    """
    Protocol implemented by cache stores used by `CachePlatform`.

    `get_or_compute` returns the unexpired value for `key`, or runs `compute`,
    stores its return value with the tags/TTL it declared, and returns it. A
    compute that raises must leave nothing stored.
    """

    backend_id: str

    async def get_or_compute(self, key: str, compute: ComputeFn[Any]) -> Any: ...

    async def delete(self, key: str) -> None: ...

    async def invalidate_tags(self, tags: Iterable[str]) -> int: ...

    async def clear(self) -> None: ...


async def run_compute(compute: ComputeFn[T], item: CacheItem) -> T:
    """Run a sync or async compute callback."""
    value = compute(item)
    if inspect.isawaitable(value):
        value = await value
    return value
