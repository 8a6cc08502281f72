"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache key derivation for cached invocations.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Mapping, Set
from dataclasses import dataclass, field
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from .errors import InvalidCacheOptionError
from .types import CACHE_KEY_OPTION, CACHE_TTL_OPTION, InvocationInput

_WORD_SPLIT = re.compile(r"[\W_]+", re.UNICODE)

# Neither `camel` output nor the hex digest can contain the separator, so
# splitting a key from the right always recovers the override unchanged.
KEY_SEPARATOR = ":"


@dataclass(frozen=True, slots=True)
class CacheKeyPlan:
    """Resolved caching decision for one call."""

    key: str
    tag: str
    ttl_s: int | None
    options: dict[str, Any] = field(default_factory=dict)


class CacheKeyBuilder:
    """
    Derive cache key, tag and TTL from `(model, input, options)`.

    `build` returns `None` when the call must bypass the cache: the
    `prompt_cache_key` option is missing or empty, or it is `None` and no
    default key is configured.
    """

    def __init__(
        self,
        *,
        default_key: str | None = None,
        default_ttl_s: int | None = None,
    ) -> None:
        self._default_key = default_key or None
        self._default_ttl_s = (
            _validate_ttl(default_ttl_s) if default_ttl_s is not None else None
        )

    def build(
        self,
        model: str,
        input: InvocationInput,
        options: Mapping[str, Any] | None,
    ) -> CacheKeyPlan | None:
        options = options or {}
        if CACHE_KEY_OPTION not in options:
            return None

        key_override = options[CACHE_KEY_OPTION]
        if key_override is None:
            key_override = self._default_key
        if key_override is None or key_override == "":
            return None
        if not isinstance(key_override, str):
            raise InvalidCacheOptionError(
                f"'{CACHE_KEY_OPTION}' must be a string, got {type(key_override).__name__}"
            )
        if not model or not model.strip():
            raise InvalidCacheOptionError("Model id must be non-empty to build a cache key")

        ttl = options.get(CACHE_TTL_OPTION)
        ttl_s = _validate_ttl(ttl) if ttl is not None else self._default_ttl_s

        tag = camel(model)
        stripped = {
            name: value
            for name, value in options.items()
            if name not in (CACHE_KEY_OPTION, CACHE_TTL_OPTION)
        }
        return CacheKeyPlan(
            key=KEY_SEPARATOR.join((key_override, tag, content_digest(input))),
            tag=tag,
            ttl_s=ttl_s,
            options=stripped,
        )


def camel(value: str) -> str:
    """
    Normalize an identifier to camel case.

    `gpt-4o-mini` becomes `gpt4oMini`; words already starting with an
    uppercase run keep their casing.
    """
    words = [word for word in _WORD_SPLIT.split(value) if word]
    joined = "".join(
        word if len(word) > 1 and word[1].isupper() else word[:1].upper() + word[1:]
        for word in words
    )
    return joined[:1].lower() + joined[1:]


def content_digest(input: InvocationInput) -> str:
    """
    Stable md5 digest of a prompt string or structured input.

    Structured input is canonicalized first: mapping keys become strings and
    sets become sorted lists, so the digest does not depend on insertion or
    hash order.
    """
    if isinstance(input, str):
        raw = input
    else:
        raw = _canonical_json(_canonicalize(input))
    return hashlib.md5(raw.encode("utf-8"), usedforsecurity=False).hexdigest()


def _canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _canonicalize(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _canonicalize(item) for key, item in value.items()}
    if isinstance(value, Set):
        return sorted((_canonicalize(item) for item in value), key=_canonical_json)
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    try:
        plain = to_jsonable_python(value)
    except PydanticSerializationError as exc:
        raise InvalidCacheOptionError(
            f"Input of type '{type(value).__name__}' cannot be digested for a cache key"
        ) from exc
    return _canonicalize(plain)


def _validate_ttl(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCacheOptionError(
            f"'{CACHE_TTL_OPTION}' must be an integer number of seconds, got {value!r}"
        )
    if value <= 0:
        raise InvalidCacheOptionError(f"'{CACHE_TTL_OPTION}' must be positive, got {value}")
    return value
