"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: factory.py.
"""

from __future__ import annotations

from .cache.base import TagAwareCache
from .cache.registry import create_cache
from .clock import Clock, SystemClock
from .contracts import Platform
from .platform import CachePlatform
from .settings import CacheSettings


def create_cache_platform(
    platform: Platform,
    *,
    settings: CacheSettings | None = None,
    cache: TagAwareCache | None = None,
    clock: Clock | None = None,
) -> CachePlatform:
    """
    Build a `CachePlatform` from explicit settings.

    An explicit `cache` wins over `settings.backend`. Backend `"none"`
    disables caching entirely.
    """
    settings = settings or CacheSettings.from_env()
    clock = clock or SystemClock()
    if cache is None:
        cache = _cache_from_settings(settings, clock)
    return CachePlatform(
        platform,
        cache=cache,
        clock=clock,
        cache_key=settings.default_key,
        cache_ttl_s=settings.default_ttl_s,
    )


def _cache_from_settings(settings: CacheSettings, clock: Clock) -> TagAwareCache | None:
    backend = settings.backend.strip().lower()
    if backend in ("", "none"):
        return None
    return create_cache(backend, settings=settings, clock=clock)
