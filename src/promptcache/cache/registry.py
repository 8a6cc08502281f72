"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/registry.py.

Backends are registered as factories so every store built from settings
shares the caller's clock and default TTL.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock

from ..clock import Clock, SystemClock
from ..errors import CacheBackendError
from ..settings import CacheSettings
from .base import TagAwareCache
from .inmemory import InMemoryTagAwareCache
from .redis import RedisTagAwareCache

CacheBackendFactory = Callable[[CacheSettings, Clock], TagAwareCache]

_REGISTRY: dict[str, CacheBackendFactory] = {}
_LOCK = Lock()


def register_cache_backend(
    backend_id: str,
    factory: CacheBackendFactory,
    *,
    overwrite: bool = False,
) -> None:
    """Register one cache backend factory by id."""
    key = backend_id.strip().lower()
    if not key:
        raise CacheBackendError("Cache backend id must be non-empty")

    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise CacheBackendError(f"Cache backend already registered: {key}")
        _REGISTRY[key] = factory


def create_cache(
    backend: str | TagAwareCache | None = None,
    *,
    settings: CacheSettings | None = None,
    clock: Clock | None = None,
) -> TagAwareCache:
    """
    Resolve a cache store from an id, an instance or the default.

    Instances pass through unchanged. An id (default `"inmemory"`) builds a
    fresh store from its registered factory with `settings` and `clock`.
    """
    if backend is not None and not isinstance(backend, str):
        return backend

    key = (backend or "inmemory").strip().lower()
    with _LOCK:
        factory = _REGISTRY.get(key)
    if factory is None:
        raise CacheBackendError(f"Unknown cache backend '{backend}'")
    return factory(settings or CacheSettings(), clock or SystemClock())


def list_cache_backends() -> list[str]:
    """List registered cache backend ids."""
    with _LOCK:
        return sorted(_REGISTRY.keys())


def _inmemory_backend(settings: CacheSettings, clock: Clock) -> TagAwareCache:
    return InMemoryTagAwareCache(clock=clock, default_ttl_s=settings.default_ttl_s)


def _redis_backend(settings: CacheSettings, clock: Clock) -> TagAwareCache:
    if not settings.redis_url:
        raise CacheBackendError("Redis cache backend requires PROMPTCACHE_REDIS_URL")
    from redis.asyncio import Redis

    return RedisTagAwareCache(
        Redis.from_url(settings.redis_url),
        prefix=settings.redis_prefix,
        default_ttl_s=settings.default_ttl_s,
    )


register_cache_backend("inmemory", _inmemory_backend)
register_cache_backend("redis", _redis_backend)
