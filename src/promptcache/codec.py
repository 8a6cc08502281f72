"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Polymorphic codec turning result variants into cacheable tagged payloads.

Encoded shape: `{"kind": <variant tag>, "payload": <json-compatible data>}`.
Every variant except streams survives `decode(encode(x)) == x`.
"""

from __future__ import annotations

import binascii
import json
from collections.abc import Callable, Mapping
from typing import Any

from .errors import DecodeFailureError, UnsupportedVariantError
from .mapping import StructuralMapper
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
from .types import JSONObject, JSONValue

GENERIC_OBJECT_TYPE = "generic"

KIND_BINARY = "binary"
KIND_CHOICE = "choice"
KIND_OBJECT = "object"
KIND_TEXT = "text"
KIND_TOOL_CALL = "tool_call"
KIND_VECTOR = "vector"

EncodedResult = JSONObject


class ResultCodec:
    """Encode/decode the closed set of result variants."""

    def __init__(self, mapper: StructuralMapper | None = None) -> None:
        self._mapper = mapper or StructuralMapper()
        self._decoders: dict[str, Callable[[Any], Result]] = {
            KIND_BINARY: self._decode_binary,
            KIND_CHOICE: self._decode_choice,
            KIND_OBJECT: self._decode_object,
            KIND_TEXT: self._decode_text,
            KIND_TOOL_CALL: self._decode_tool_calls,
            KIND_VECTOR: self._decode_vectors,
        }

    @property
    def mapper(self) -> StructuralMapper:
        return self._mapper

    def supports_encoding(self, value: Any) -> bool:
        return isinstance(
            value,
            (
                BinaryResult,
                ChoiceResult,
                ObjectResult,
                TextResult,
                ToolCallResult,
                VectorResult,
            ),
        )

    def supports_decoding(self, data: Any) -> bool:
        return isinstance(data, Mapping) and data.get("kind") in self._decoders

    def encode(self, result: Result) -> EncodedResult:
        """
        Encode one result variant.

        Raises:
            UnsupportedVariantError: For `StreamResult` and for any value
                outside the closed variant set.
        """
        if isinstance(result, BinaryResult):
            return _envelope(
                KIND_BINARY,
                {"base64": result.to_base64(), "mime_type": result.mime_type},
            )
        if isinstance(result, ChoiceResult):
            return _envelope(KIND_CHOICE, [self.encode(choice) for choice in result.content])
        if isinstance(result, ObjectResult):
            return _envelope(KIND_OBJECT, self._encode_object(result.content))
        if isinstance(result, TextResult):
            return _envelope(KIND_TEXT, result.content)
        if isinstance(result, ToolCallResult):
            return _envelope(KIND_TOOL_CALL, [call.to_dict() for call in result.content])
        if isinstance(result, VectorResult):
            return _envelope(
                KIND_VECTOR,
                [
                    {"data": list(vector.data), "dimensions": vector.dimensions}
                    for vector in result.content
                ],
            )
        if isinstance(result, StreamResult):
            raise UnsupportedVariantError(
                f'"{StreamResult.__name__}" cannot be encoded: a stream has no replayable snapshot.'
            )
        raise UnsupportedVariantError(
            f'Unsupported result type: "{type(result).__name__}".'
        )

    def decode(self, data: Any) -> Result:
        """
        Decode one tagged payload back into a result variant.

        Raises:
            DecodeFailureError: On an unknown kind or malformed payload.
        """
        if not isinstance(data, Mapping) or "kind" not in data or "payload" not in data:
            raise DecodeFailureError("Encoded result must be a mapping with 'kind' and 'payload'")

        kind = data["kind"]
        decoder = self._decoders.get(kind) if isinstance(kind, str) else None
        if decoder is None:
            raise DecodeFailureError(f'Unsupported result kind: "{kind}".')

        try:
            return decoder(data["payload"])
        except DecodeFailureError:
            raise
        except (KeyError, TypeError, ValueError, binascii.Error) as exc:
            raise DecodeFailureError(f'Malformed "{kind}" payload: {exc}') from exc

    def _encode_object(self, content: Any) -> JSONObject:
        if isinstance(content, (dict, list)):
            return {"type": GENERIC_OBJECT_TYPE, "content": content}
        return {
            "type": self._mapper.type_name(content),
            "content": self._mapper.to_plain(content),
        }

    def _decode_binary(self, payload: Any) -> BinaryResult:
        return BinaryResult.from_base64(payload["base64"], payload.get("mime_type"))

    def _decode_choice(self, payload: Any) -> ChoiceResult:
        return ChoiceResult([self.decode(choice) for choice in _as_list(payload)])

    def _decode_object(self, payload: Any) -> ObjectResult:
        type_name = payload["type"]
        content = payload["content"]
        if not isinstance(type_name, str):
            raise DecodeFailureError(
                f"Object type name must be a string, got {type(type_name).__name__}"
            )
        if type_name == GENERIC_OBJECT_TYPE:
            return ObjectResult(content)
        return ObjectResult(self._mapper.from_plain(content, type_name))

    def _decode_text(self, payload: Any) -> TextResult:
        if not isinstance(payload, str):
            raise TypeError("text payload must be a string")
        return TextResult(payload)

    def _decode_tool_calls(self, payload: Any) -> ToolCallResult:
        return ToolCallResult(
            [
                ToolCall(
                    id=row["id"],
                    name=row["function"]["name"],
                    arguments=json.loads(row["function"]["arguments"]),
                )
                for row in _as_list(payload)
            ]
        )

    def _decode_vectors(self, payload: Any) -> VectorResult:
        return VectorResult(
            [Vector(list(row["data"]), row["dimensions"]) for row in _as_list(payload)]
        )


def _envelope(kind: str, payload: JSONValue) -> EncodedResult:
    return {"kind": kind, "payload": payload}


def _as_list(payload: Any) -> list[Any]:
    if not isinstance(payload, list):
        raise TypeError(f"expected a list payload, got {type(payload).__name__}")
    return payload
