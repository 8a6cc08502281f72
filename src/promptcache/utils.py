"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Utility functions shared by the cache layer.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine to completion from synchronous code.

    Raises:
        RuntimeError: If called inside a running event loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    coro.close()
    raise RuntimeError(
        "run_sync() cannot be called from a running event loop; await the async API instead"
    )


async def resolve(value: T | Awaitable[T]) -> T:
    """Await `value` when it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value
