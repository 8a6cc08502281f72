"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines shared type aliases and reserved option names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]

# Input accepted by a platform: plain prompt text or any structured value
# (message bags, dicts, pydantic models).
InvocationInput: TypeAlias = str | Mapping[str, Any] | list[Any] | object
InvocationOptions: TypeAlias = Mapping[str, Any]

CACHE_KEY_OPTION = "prompt_cache_key"
CACHE_TTL_OPTION = "prompt_cache_ttl"

# Metadata keys stamped on every result served through the cache.
CACHED_METADATA_KEY = "cached"
CACHE_KEY_METADATA_KEY = "cache_key"
CACHED_AT_METADATA_KEY = "cached_at"
