"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Prompt cache settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import InvalidCacheOptionError


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings used to assemble a cached platform."""

    default_key: str | None = None
    default_ttl_s: int | None = None
    backend: str = "inmemory"
    redis_url: str | None = None
    redis_prefix: str = "promptcache"

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from environment variables."""
        return CacheSettings(
            default_key=os.getenv("PROMPTCACHE_KEY") or None,
            default_ttl_s=_env_ttl("PROMPTCACHE_TTL_S"),
            backend=os.getenv("PROMPTCACHE_BACKEND", "inmemory").strip().lower(),
            redis_url=os.getenv("PROMPTCACHE_REDIS_URL"),
            redis_prefix=os.getenv("PROMPTCACHE_REDIS_PREFIX", "promptcache"),
        )


def _env_ttl(name: str) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidCacheOptionError(
            f"{name} must be an integer number of seconds, got {raw!r}"
        ) from exc
