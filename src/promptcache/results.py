"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines the closed set of invocation result variants.

Exactly seven variants exist. Every variant except `StreamResult` can be
snapshotted into a cache entry by `promptcache.codec.ResultCodec`.
"""

from __future__ import annotations

import base64
import json
from collections.abc import AsyncIterable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from .metadata import Metadata
from .types import JSONObject


@dataclass(frozen=True, slots=True)
class ToolCall:
    """One model-requested function call."""

    id: str
    name: str
    arguments: JSONObject = field(default_factory=dict)

    def to_dict(self) -> JSONObject:
        """Serialize in the OpenAI tool-call shape, arguments as JSON text."""
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(
                    self.arguments,
                    ensure_ascii=False,
                    separators=(",", ":"),
                    sort_keys=True,
                ),
            },
        }


@dataclass(frozen=True, slots=True)
class Vector:
    """Embedding vector with its dimension count."""

    data: list[float]
    dimensions: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", list(self.data))
        if self.dimensions is None:
            object.__setattr__(self, "dimensions", len(self.data))
        elif self.dimensions != len(self.data):
            raise ValueError(
                f"Vector must have {self.dimensions} dimensions, got {len(self.data)}"
            )


@dataclass(frozen=True, slots=True)
class BinaryResult:
    """Raw bytes returned by a model, for example generated audio or images."""

    content: bytes
    mime_type: str | None = None
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)

    def to_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")

    def to_data_uri(self) -> str:
        if self.mime_type is None:
            raise ValueError("Mime type is required to build a data URI")
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @classmethod
    def from_base64(cls, data: str, mime_type: str | None = None) -> "BinaryResult":
        return cls(base64.b64decode(data, validate=True), mime_type)


@dataclass(frozen=True, slots=True)
class ChoiceResult:
    """Several alternative results returned for one call."""

    content: list["Result"]
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class ObjectResult:
    """Structured output; either a plain mapping or a typed value."""

    content: Any
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class TextResult:
    """Plain text completion."""

    content: str
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class ToolCallResult:
    """Ordered tool calls requested by the model."""

    content: list[ToolCall]
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class VectorResult:
    """Ordered embedding vectors."""

    content: list[Vector]
    metadata: Metadata = field(default_factory=Metadata, compare=False, repr=False)


@dataclass(frozen=True, slots=True, eq=False)
class StreamResult:
    """
    One-shot sequence of partial results.

    The underlying iterator is consumed on read and cannot be replayed, so a
    stream never has a stable snapshot to cache.
    """

    content: Iterable[Any] | AsyncIterable[Any]
    metadata: Metadata = field(default_factory=Metadata, repr=False)


Result: TypeAlias = (
    BinaryResult
    | ChoiceResult
    | ObjectResult
    | TextResult
    | ToolCallResult
    | VectorResult
    | StreamResult
)

RESULT_TYPES: tuple[type, ...] = (
    BinaryResult,
    ChoiceResult,
    ObjectResult,
    TextResult,
    ToolCallResult,
    VectorResult,
    StreamResult,
)

__all__ = [
    "ToolCall",
    "Vector",
    "BinaryResult",
    "ChoiceResult",
    "ObjectResult",
    "TextResult",
    "ToolCallResult",
    "VectorResult",
    "StreamResult",
    "Result",
    "RESULT_TYPES",
]
