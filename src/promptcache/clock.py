"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Narrow time source used for entry timestamps and in-memory expiry.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Current-time capability injected into the cache layer."""

    def now(self) -> datetime: ...

    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class MockClock:
    """
    Frozen clock for tests.

    `sleep` advances the frozen instant instead of blocking, so TTL expiry can
    be exercised deterministically.
    """

    def __init__(self, now: datetime | float | None = None) -> None:
        self._now = _to_datetime(now if now is not None else time.time())

    def now(self) -> datetime:
        return self._now

    def sleep(self, seconds: float) -> None:
        self._now = self._now + timedelta(seconds=seconds)

    def modify(self, now: datetime | float) -> None:
        """Jump the clock to an explicit instant."""
        self._now = _to_datetime(now)


def timestamp(clock: Clock) -> int:
    """Return the clock's current instant as integer unix seconds."""
    return int(clock.now().timestamp())


def _to_datetime(value: datetime | float) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime.fromtimestamp(float(value), tz=timezone.utc)
