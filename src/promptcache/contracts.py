"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Protocols for the invocation service wrapped by the cache layer.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

from .deferred import DeferredResult
from .types import InvocationInput, InvocationOptions


@runtime_checkable
class ModelCatalog(Protocol):
    """Catalog of models a platform can serve. Opaque to the cache layer."""

    def get_models(self) -> dict[str, Any]: ...


@runtime_checkable
class Platform(Protocol):
    """
    Generative-AI invocation service.

    `invoke` may return the deferred result directly or an awaitable of it;
    callers in this package handle both.
    """

    def invoke(
        self,
        model: str,
        input: InvocationInput,
        options: InvocationOptions | None = None,
    ) -> DeferredResult | Awaitable[DeferredResult]: ...

    def get_model_catalog(self) -> ModelCatalog: ...
