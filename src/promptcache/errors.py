"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the prompt cache layer.
"""

from __future__ import annotations


class PromptCacheError(RuntimeError):
    """Base error for prompt cache failures."""


class UnsupportedVariantError(PromptCacheError):
    """Raised when a value cannot be encoded into a cache entry."""


class DecodeFailureError(PromptCacheError):
    """Raised when a cached payload cannot be turned back into a result."""


class ResultMappingError(PromptCacheError):
    """Raised when typed object content cannot be reduced to plain data."""


class InvalidCacheOptionError(PromptCacheError):
    """Raised when caching options on a call are malformed."""


class CacheBackendError(PromptCacheError):
    """Raised when cache backend resolution fails."""
