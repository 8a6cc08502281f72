from __future__ import annotations

import base64
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from promptcache import (
    BinaryResult,
    ChoiceResult,
    DecodeFailureError,
    ObjectResult,
    ResultCodec,
    ResultMappingError,
    StreamResult,
    StructuralMapper,
    TextResult,
    ToolCall,
    ToolCallResult,
    UnsupportedVariantError,
    Vector,
    VectorResult,
)


class _Forecast(BaseModel):
    city: str
    temperatures: list[float]
    unit: str = "celsius"


@dataclass
class _Point:
    x: int
    y: int


class _Opaque:
    def __init__(self) -> None:
        self.handle = object()


def _round_trip_cases():
    return [
        BinaryResult(b"foo"),
        BinaryResult(b"\x89PNG\r\n", mime_type="image/png"),
        ChoiceResult([TextResult("foo"), TextResult("bar")]),
        ObjectResult({"foo": "bar", "nested": {"n": [1, 2, 3]}}),
        ObjectResult([{"a": 1}, {"b": 2}]),
        ObjectResult(_Forecast(city="Lyon", temperatures=[12.5, 14.0])),
        ObjectResult(_Point(x=1, y=-2)),
        TextResult("foo"),
        ToolCallResult(
            [
                ToolCall("call_1", "get_weather", {"city": "Lyon", "days": 3}),
                ToolCall("call_2", "noop"),
            ]
        ),
        VectorResult([Vector([0.1, 0.2, 0.3]), Vector([1.0, -1.0])]),
    ]


@pytest.mark.parametrize("result", _round_trip_cases(), ids=lambda r: type(r).__name__)
def test_decode_restores_structurally_equal_result(result):
    codec = ResultCodec()

    encoded = codec.encode(result)
    decoded = codec.decode(encoded)

    assert decoded == result
    assert codec.encode(decoded) == encoded


def test_encode_produces_tagged_payloads():
    codec = ResultCodec()

    assert codec.encode(BinaryResult(b"foo")) == {
        "kind": "binary",
        "payload": {"base64": base64.b64encode(b"foo").decode(), "mime_type": None},
    }
    assert codec.encode(ChoiceResult([TextResult("foo"), TextResult("bar")])) == {
        "kind": "choice",
        "payload": [
            {"kind": "text", "payload": "foo"},
            {"kind": "text", "payload": "bar"},
        ],
    }
    assert codec.encode(ObjectResult({"foo": "bar"})) == {
        "kind": "object",
        "payload": {"type": "generic", "content": {"foo": "bar"}},
    }
    assert codec.encode(TextResult("foo")) == {"kind": "text", "payload": "foo"}
    assert codec.encode(VectorResult([Vector([0.1, 0.2, 0.3])])) == {
        "kind": "vector",
        "payload": [{"data": [0.1, 0.2, 0.3], "dimensions": 3}],
    }


def test_typed_object_is_stored_as_plain_data_with_type_name():
    codec = ResultCodec()

    encoded = codec.encode(ObjectResult(_Forecast(city="Oslo", temperatures=[-3.0])))

    assert encoded == {
        "kind": "object",
        "payload": {
            "type": f"{__name__}:_Forecast",
            "content": {"city": "Oslo", "temperatures": [-3.0], "unit": "celsius"},
        },
    }
    decoded = codec.decode(encoded)
    assert isinstance(decoded.content, _Forecast)


def test_tool_call_arguments_are_stored_as_json_text():
    codec = ResultCodec()

    encoded = codec.encode(ToolCallResult([ToolCall("call_1", "search", {"q": "x", "k": 2})]))

    assert encoded["payload"] == [
        {
            "id": "call_1",
            "type": "function",
            "function": {"name": "search", "arguments": '{"k":2,"q":"x"}'},
        }
    ]


def test_locally_defined_types_round_trip_once_registered():
    class Reply(BaseModel):
        answer: str

    mapper = StructuralMapper()
    mapper.register(Reply)
    codec = ResultCodec(mapper)

    result = ObjectResult(Reply(answer="42"))

    assert codec.decode(codec.encode(result)) == result


def test_stream_result_cannot_be_encoded():
    codec = ResultCodec()
    consumed = []

    def _chunks():
        consumed.append(True)
        yield "partial"

    with pytest.raises(UnsupportedVariantError, match="StreamResult"):
        codec.encode(StreamResult(_chunks()))

    assert consumed == []
    assert codec.supports_encoding(StreamResult(iter(()))) is False


def test_values_outside_the_closed_set_are_rejected():
    codec = ResultCodec()

    with pytest.raises(UnsupportedVariantError, match="str"):
        codec.encode("plain text")  # type: ignore[arg-type]

    assert codec.supports_encoding(TextResult("x")) is True
    assert codec.supports_encoding(object()) is False


def test_unmappable_object_content_raises_mapping_error():
    codec = ResultCodec()

    with pytest.raises(ResultMappingError, match="_Opaque"):
        codec.encode(ObjectResult(_Opaque()))


def test_decode_rejects_unknown_kind_without_side_effects():
    codec = ResultCodec()
    payload = {"kind": "hologram", "payload": {"frames": 3}}
    snapshot = {"kind": "hologram", "payload": {"frames": 3}}

    with pytest.raises(DecodeFailureError, match="hologram"):
        codec.decode(payload)

    assert payload == snapshot
    assert codec.supports_decoding(payload) is False
    assert codec.supports_decoding({"kind": "text", "payload": "x"}) is True


@pytest.mark.parametrize(
    "data",
    [
        None,
        "text",
        {"payload": "missing kind"},
        {"kind": "text"},
        {"kind": "text", "payload": 3},
        {"kind": "binary", "payload": {"base64": "***not base64***"}},
        {"kind": "choice", "payload": {"not": "a list"}},
        {"kind": "tool_call", "payload": [{"id": "1", "function": {"name": "f", "arguments": "{"}}]},
        {"kind": "vector", "payload": [{"data": [1.0, 2.0], "dimensions": 5}]},
        {"kind": "object", "payload": {"type": 5, "content": {}}},
        {"kind": "object", "payload": {"type": None, "content": {}}},
        {"kind": "object", "payload": {"type": "no_module_separator", "content": {}}},
        {"kind": "object", "payload": {"type": "promptcache_missing.module:Thing", "content": {}}},
        {"kind": "object", "payload": {"type": f"{__name__}:_Forecast", "content": {"city": 1}}},
    ],
)
def test_decode_rejects_malformed_payloads(data):
    with pytest.raises(DecodeFailureError):
        ResultCodec().decode(data)


def test_tuple_vector_data_round_trips_equal():
    codec = ResultCodec()
    result = VectorResult([Vector((0.1, 0.2))])

    assert codec.decode(codec.encode(result)) == result


def test_nested_choice_preserves_order():
    codec = ResultCodec()
    result = ChoiceResult(
        [
            TextResult("first"),
            ChoiceResult([BinaryResult(b"a"), ObjectResult({"k": "v"})]),
            VectorResult([Vector([0.5])]),
        ]
    )

    decoded = codec.decode(codec.encode(result))

    assert decoded == result
    assert [type(choice) for choice in decoded.content] == [
        TextResult,
        ChoiceResult,
        VectorResult,
    ]
