"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/coalescing.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from threading import Lock
from typing import Any, TypeVar

T = TypeVar("T")


class RequestCoalescer:
    """Deduplicate identical in-flight computations by key."""

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Future[Any]] = {}
        self._lock = Lock()

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        with self._lock:
            existing = self._tasks.get(key)
            if existing is None:
                task: asyncio.Future[Any] = asyncio.ensure_future(factory())
                self._tasks[key] = task
                owner = True
            else:
                task = existing
                owner = False

        try:
            if owner:
                return await task
            # Waiters must not cancel the shared computation.
            return await asyncio.shield(task)
        finally:
            if owner:
                with self._lock:
                    if self._tasks.get(key) is task:
                        self._tasks.pop(key, None)

    def in_flight(self) -> int:
        with self._lock:
            return len(self._tasks)
