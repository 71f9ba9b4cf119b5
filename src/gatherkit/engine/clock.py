# src/gatherkit/engine/clock.py
"""Clock abstraction for testable time-dependent gatherers.

This module provides a Clock protocol that abstracts time access and
blocking waits, enabling deterministic testing of the rate limiter.

Production code uses SystemClock (the default).
Tests inject MockClock to control time advancement.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    """Abstract clock for interval-based operations.

    Implementations:
    - SystemClock: Uses time.monotonic() and real blocking waits (production)
    - MockClock: Returns controllable times, sleeping advances time (testing)
    """

    def monotonic(self) -> float:
        """Return monotonic time in seconds.

        Must never go backwards. Corresponds to time.monotonic().
        """
        ...

    def sleep(self, seconds: float, cancel: threading.Event | None = None) -> bool:
        """Block for ``seconds``, or until ``cancel`` is set.

        Returns:
            True if the full duration elapsed, False if interrupted by cancel.
        """
        ...


class SystemClock:
    """Production clock using time.monotonic().

    Waits are real blocking waits on the calling thread. When a cancel event
    is given the wait uses Event.wait() so another thread can interrupt it.
    """

    def monotonic(self) -> float:
        """Return system monotonic time."""
        return time.monotonic()

    def sleep(self, seconds: float, cancel: threading.Event | None = None) -> bool:
        """Block the calling thread; return False if cancel was set."""
        if seconds <= 0:
            return cancel is None or not cancel.is_set()
        if cancel is None:
            time.sleep(seconds)
            return True
        return not cancel.wait(timeout=seconds)


class MockClock:
    """Controllable clock for deterministic testing.

    sleep() advances time instantly instead of blocking, and records every
    requested duration so tests can assert on throttling behavior.

    Example:
        clock = MockClock(start=0.0)
        limiter = rate_limited(1000, clock=clock)

        Stream([1, 2, 3]).gather(limiter).to_list()
        assert clock.monotonic() == 2.0
        assert clock.sleeps == [1.0, 1.0]
    """

    def __init__(self, start: float = 0.0) -> None:
        """Initialize mock clock at a given time.

        Args:
            start: Initial monotonic time value (default 0.0).
        """
        self._current = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        """Return current mock time."""
        return self._current

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current += seconds

    def sleep(self, seconds: float, cancel: threading.Event | None = None) -> bool:
        """Record the request and advance time, unless cancel is already set.

        An interrupted sleep does not advance time.
        """
        self.sleeps.append(seconds)
        if cancel is not None and cancel.is_set():
            return False
        if seconds > 0:
            self._current += seconds
        return True


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
