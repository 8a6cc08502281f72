"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Mutable metadata bag owned by results and deferred results.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


class Metadata(MutableMapping[str, Any]):
    """
    String-keyed metadata attached to one result value.

    Each result owns its own bag; `merge` and `set` are last-write-wins on
    key collision.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def add(self, key: str, value: Any) -> None:
        self._values[key] = value

    def set(self, values: Mapping[str, Any]) -> None:
        """Replace every entry with `values`."""
        self._values = dict(values)

    def merge(self, other: Mapping[str, Any]) -> None:
        """Union `other` into this bag; incoming keys overwrite existing ones."""
        source = other.all() if isinstance(other, Metadata) else other
        self._values.update(source)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def all(self) -> dict[str, Any]:
        """Return a snapshot copy of every entry."""
        return dict(self._values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Metadata({self._values!r})"
