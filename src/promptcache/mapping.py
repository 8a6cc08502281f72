"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Structural mapper used for typed object results.

Typed content (pydantic models, dataclasses, TypedDicts) is reduced to plain
JSON data with a pydantic `TypeAdapter` and rebuilt from a stored type name.
"""

from __future__ import annotations

import importlib
from functools import lru_cache
from threading import Lock
from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from .errors import DecodeFailureError, ResultMappingError
from .types import JSONValue


class StructuralMapper:
    """Maps typed values to plain data and back by `<module>:<qualname>` name."""

    def __init__(self) -> None:
        self._types: dict[str, type] = {}
        self._lock = Lock()

    def register(self, cls: type, *, name: str | None = None) -> str:
        """
        Register a type for reverse mapping.

        Needed for types that cannot be re-imported by name, e.g. classes
        defined inside functions.
        """
        key = name or self.type_name_of(cls)
        with self._lock:
            self._types[key] = cls
        return key

    @staticmethod
    def type_name_of(cls: type) -> str:
        return f"{cls.__module__}:{cls.__qualname__}"

    def type_name(self, value: Any) -> str:
        cls = type(value)
        with self._lock:
            for key, registered in self._types.items():
                if registered is cls:
                    return key
        return self.type_name_of(cls)

    def to_plain(self, value: Any) -> JSONValue:
        """Reduce a typed value to JSON-compatible data."""
        try:
            adapter = _adapter_for(type(value))
            return adapter.dump_python(value, mode="json")
        except (PydanticSchemaGenerationError, TypeError) as exc:
            raise ResultMappingError(
                f"Object content of type '{type(value).__name__}' cannot be mapped"
            ) from exc

    def from_plain(self, data: JSONValue, type_name: str) -> Any:
        """Rebuild a typed value from plain data."""
        cls = self.resolve(type_name)
        try:
            return _adapter_for(cls).validate_python(data)
        except (ValidationError, PydanticSchemaGenerationError, TypeError) as exc:
            raise DecodeFailureError(
                f"Cannot rebuild object content of type '{type_name}': {exc}"
            ) from exc

    def resolve(self, type_name: str) -> type:
        """Resolve a stored type name to the class it names."""
        if not isinstance(type_name, str):
            raise DecodeFailureError(f"Object type name must be a string, got {type_name!r}")
        with self._lock:
            registered = self._types.get(type_name)
        if registered is not None:
            return registered

        module_name, sep, qualname = type_name.partition(":")
        if not sep or not module_name or not qualname:
            raise DecodeFailureError(f"Malformed object type name '{type_name}'")
        try:
            target: Any = importlib.import_module(module_name)
            for part in qualname.split("."):
                target = getattr(target, part)
        except (ImportError, AttributeError) as exc:
            raise DecodeFailureError(f"Unknown object type '{type_name}'") from exc
        if not isinstance(target, type):
            raise DecodeFailureError(f"Object type '{type_name}' is not a class")
        return target


@lru_cache(maxsize=256)
def _adapter_for(cls: type) -> TypeAdapter[Any]:
    return TypeAdapter(cls)
