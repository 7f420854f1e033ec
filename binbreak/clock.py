from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source for the title animation and the frame loop.

    Nothing in the core reads wall time directly, so tests can step time by hand.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()
