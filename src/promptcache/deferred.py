"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Caller-facing wrapper around one invocation outcome.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .metadata import Metadata
from .results import Result


class RawResult(Protocol):
    """Raw backend response snapshot."""

    @property
    def data(self) -> Any: ...


class ResultConverter(Protocol):
    """Turns a raw backend response into a typed result."""

    def convert(self, raw_result: RawResult, options: Mapping[str, Any]) -> Result: ...


class InMemoryRawResult:
    """Raw result whose snapshot is already held in memory."""

    def __init__(self, data: Any = None) -> None:
        self._data = {} if data is None else data

    @property
    def data(self) -> Any:
        return self._data


class PlainConverter:
    """Converter that hands back a pre-built result."""

    def __init__(self, result: Result) -> None:
        self._result = result

    def convert(self, raw_result: RawResult, options: Mapping[str, Any]) -> Result:
        _ = raw_result
        _ = options
        return self._result


class DeferredResult:
    """
    Result of one platform invocation.

    Conversion from the raw response is deferred until `result` is first read
    and then memoized. The wrapper owns its own metadata bag, distinct from the
    converted result's bag.
    """

    def __init__(
        self,
        converter: ResultConverter,
        raw_result: RawResult,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._converter = converter
        self._raw_result = raw_result
        self._options = dict(options or {})
        self._result: Result | None = None
        self._metadata = Metadata()

    @property
    def result(self) -> Result:
        if self._result is None:
            self._result = self._converter.convert(self._raw_result, self._options)
        return self._result

    @property
    def raw_result(self) -> RawResult:
        return self._raw_result

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    @property
    def metadata(self) -> Metadata:
        return self._metadata
