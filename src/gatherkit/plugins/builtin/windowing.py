# src/gatherkit/plugins/builtin/windowing.py
"""Windowing gatherers: fixed (tumbling) and sliding windows.

Windows are emitted as tuples, so a pushed window is an immutable snapshot
that later integration cannot change.

Fixed windows flush a short final window at the end of the run. Sliding
windows never emit a partial window: fewer than ``size`` elements produce
no output at all.
"""

from __future__ import annotations

from collections import deque

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.plugins.validation import require_positive_int


def window_fixed[T](size: int) -> Gatherer[T, list[T], tuple[T, ...]]:
    """Group elements into non-overlapping windows of ``size``.

    For n elements this emits ceil(n / size) windows; every window but the
    last has exactly ``size`` elements.

    Raises:
        GathererConstructionError: If size is not a positive int
    """
    require_positive_int("window_fixed", "size", size)

    def integrate(buffer: list[T], element: T, downstream: Downstream[tuple[T, ...]]) -> bool:
        buffer.append(element)
        if len(buffer) < size:
            return True
        window = tuple(buffer)
        buffer.clear()
        return downstream.push(window)

    def finish(buffer: list[T], downstream: Downstream[tuple[T, ...]]) -> None:
        if buffer and not downstream.is_rejecting():
            downstream.push(tuple(buffer))
        buffer.clear()

    return Gatherer.of_sequential(list, integrate, finish, name="window_fixed")


def window_sliding[T](size: int) -> Gatherer[T, deque[T], tuple[T, ...]]:
    """Emit every run of ``size`` consecutive elements, advancing by one.

    For n >= size this emits n - size + 1 windows; for n < size it emits
    nothing. Consecutive windows overlap by size - 1 elements.

    Raises:
        GathererConstructionError: If size is not a positive int
    """
    require_positive_int("window_sliding", "size", size)

    def initializer() -> deque[T]:
        return deque(maxlen=size)

    def integrate(window: deque[T], element: T, downstream: Downstream[tuple[T, ...]]) -> bool:
        # maxlen evicts the oldest element once the window is full
        window.append(element)
        if len(window) < size:
            return True
        return downstream.push(tuple(window))

    return Gatherer.of_sequential(initializer, integrate, name="window_sliding")
