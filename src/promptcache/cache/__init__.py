"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import CacheItem, CacheRow, TagAwareCache
from .inmemory import InMemoryTagAwareCache
from .redis import RedisTagAwareCache
from .registry import (
    create_cache,
    list_cache_backends,
    register_cache_backend,
)

__all__ = [
    "CacheItem",
    "CacheRow",
    "TagAwareCache",
    "InMemoryTagAwareCache",
    "RedisTagAwareCache",
    "register_cache_backend",
    "create_cache",
    "list_cache_backends",
]
