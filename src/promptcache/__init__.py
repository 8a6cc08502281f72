"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: __init__.py.
"""

from __future__ import annotations

from .cache import (
    CacheItem,
    InMemoryTagAwareCache,
    RedisTagAwareCache,
    TagAwareCache,
    create_cache,
    list_cache_backends,
    register_cache_backend,
)
from .clock import Clock, MockClock, SystemClock
from .codec import GENERIC_OBJECT_TYPE, ResultCodec
from .contracts import ModelCatalog, Platform
from .deferred import DeferredResult, InMemoryRawResult, PlainConverter, RawResult
from .entry import CacheEntry
from .errors import (
    CacheBackendError,
    DecodeFailureError,
    InvalidCacheOptionError,
    PromptCacheError,
    ResultMappingError,
    UnsupportedVariantError,
)
from .factory import create_cache_platform
from .keys import CacheKeyBuilder, CacheKeyPlan, camel, content_digest
from .mapping import StructuralMapper
from .metadata import Metadata
from .platform import CachePlatform
from .results import (
    BinaryResult,
    ChoiceResult,
    ObjectResult,
    Result,
    StreamResult,
    TextResult,
    ToolCall,
    ToolCallResult,
    Vector,
    VectorResult,
)
from .settings import CacheSettings
from .types import CACHE_KEY_OPTION, CACHE_TTL_OPTION

__all__ = [
    "CachePlatform",
    "create_cache_platform",
    "CacheSettings",
    "CacheKeyBuilder",
    "CacheKeyPlan",
    "camel",
    "content_digest",
    "ResultCodec",
    "GENERIC_OBJECT_TYPE",
    "StructuralMapper",
    "CacheEntry",
    "Metadata",
    "DeferredResult",
    "InMemoryRawResult",
    "PlainConverter",
    "RawResult",
    "Platform",
    "ModelCatalog",
    "Clock",
    "SystemClock",
    "MockClock",
    "CacheItem",
    "TagAwareCache",
    "InMemoryTagAwareCache",
    "RedisTagAwareCache",
    "register_cache_backend",
    "create_cache",
    "list_cache_backends",
    "BinaryResult",
    "ChoiceResult",
    "ObjectResult",
    "TextResult",
    "ToolCall",
    "ToolCallResult",
    "Vector",
    "VectorResult",
    "StreamResult",
    "Result",
    "PromptCacheError",
    "UnsupportedVariantError",
    "DecodeFailureError",
    "ResultMappingError",
    "InvalidCacheOptionError",
    "CacheBackendError",
    "CACHE_KEY_OPTION",
    "CACHE_TTL_OPTION",
]
