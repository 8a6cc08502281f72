"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Persisted cache entry shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import DecodeFailureError
from .types import JSONObject


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One stored invocation outcome. Replaced wholesale, never patched."""

    result: JSONObject
    raw_data: Any
    cached_at: int
    cache_key: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result,
            "raw_data": self.raw_data,
            "metadata": dict(self.metadata),
            "cached_at": self.cached_at,
            "cache_key": self.cache_key,
        }

    @staticmethod
    def from_dict(row: Any) -> "CacheEntry":
        if not isinstance(row, Mapping):
            raise DecodeFailureError(f"Cache entry must be a mapping, got {type(row).__name__}")
        try:
            result = row["result"]
            cached_at = row["cached_at"]
            cache_key = row["cache_key"]
        except KeyError as exc:
            raise DecodeFailureError(f"Cache entry is missing field {exc}") from exc

        metadata = row.get("metadata") or {}
        if not isinstance(result, Mapping) or not isinstance(metadata, Mapping):
            raise DecodeFailureError("Cache entry result and metadata must be mappings")
        if isinstance(cached_at, bool) or not isinstance(cached_at, int):
            raise DecodeFailureError("Cache entry 'cached_at' must be integer seconds")
        if not isinstance(cache_key, str):
            raise DecodeFailureError("Cache entry 'cache_key' must be a string")

        return CacheEntry(
            result=dict(result),
            raw_data=row.get("raw_data"),
            cached_at=cached_at,
            cache_key=cache_key,
            metadata=dict(metadata),
        )
