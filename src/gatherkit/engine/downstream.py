# src/gatherkit/engine/downstream.py
"""Terminal downstream implementations used by the executor and streams."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

from gatherkit.contracts.downstream import Downstream


class ListDownstream[R]:
    """Collects pushed values into a list.

    With a capacity, the downstream accepts that many values and then
    rejects everything else, which lets a consumer cut a run short the same
    way a ``limit`` does.

    Example:
        sink = ListDownstream[int](capacity=2)
        sink.push(1)  # True
        sink.push(2)  # False - capacity reached, no more wanted
        sink.push(3)  # False - ignored
        sink.items    # [1, 2]
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.items: list[R] = []
        self._capacity = capacity

    def push(self, value: R) -> bool:
        if self.is_rejecting():
            return False
        self.items.append(value)
        return not self.is_rejecting()

    def is_rejecting(self) -> bool:
        return self._capacity is not None and len(self.items) >= self._capacity


class CallbackDownstream[R]:
    """Hands every pushed value to a callback.

    If the callback returns False the downstream starts rejecting. Any other
    return value (including None) keeps it accepting.
    """

    def __init__(self, callback: Callable[[R], Any]) -> None:
        self._callback = callback
        self._rejecting = False

    def push(self, value: R) -> bool:
        if self._rejecting:
            return False
        if self._callback(value) is False:
            self._rejecting = True
        return not self._rejecting

    def is_rejecting(self) -> bool:
        return self._rejecting


class BufferDownstream[R]:
    """FIFO buffer drained by the lazy iterator between source pulls."""

    def __init__(self) -> None:
        self._buffer: deque[R] = deque()

    def push(self, value: R) -> bool:
        self._buffer.append(value)
        return True

    def is_rejecting(self) -> bool:
        return False

    def drain(self) -> list[R]:
        """Remove and return everything buffered so far, oldest first."""
        drained = list(self._buffer)
        self._buffer.clear()
        return drained


class CountingDownstream[R]:
    """Wraps a downstream and counts the values it accepted."""

    __slots__ = ("_inner", "pushed")

    def __init__(self, inner: Downstream[R]) -> None:
        self._inner = inner
        self.pushed = 0

    def push(self, value: R) -> bool:
        if self._inner.is_rejecting():
            return False
        self.pushed += 1
        return self._inner.push(value)

    def is_rejecting(self) -> bool:
        return self._inner.is_rejecting()
