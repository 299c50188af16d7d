"""Logical clock protocol.

The campaign never reads time on its own: every time-dependent check asks the
injected clock at call time. Nothing advances autonomously.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current logical time in unix seconds."""

    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock time, truncated to whole seconds."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """A clock that only moves when told to.

    Used by tests and by the scenario runner to replay litigation timelines.
    """

    def __init__(self, start_unix: int = 0) -> None:
        self._now = start_unix

    def now(self) -> int:
        return self._now

    def set(self, unix: int) -> None:
        self._now = unix

    def advance(self, seconds: int) -> int:
        """Move forward by ``seconds`` and return the new time."""
        if seconds < 0:
            raise ValueError("ManualClock cannot advance by a negative amount")
        self._now += seconds
        return self._now
