# src/gatherkit/contracts/state.py
"""Run-scoped state cells.

A gatherer's initializer returns the state object for one run. Containers
(lists, sets, deques) can be mutated in place, but a running value such as an
accumulated sum is immutable in Python, so it lives in a StateCell and the
integrator rebinds ``cell.value``.
"""

from __future__ import annotations

from typing import Any


class StateCell[A]:
    """Mutable box holding one value for the duration of a run.

    The executor creates exactly one state per run through the initializer
    and passes the same object to every integrator call, so rebinding
    ``value`` carries it forward to the next element.

    Example:
        def integrate(cell: StateCell[int], element: int, downstream) -> bool:
            cell.value += element
            return downstream.push(cell.value)
    """

    __slots__ = ("value",)

    def __init__(self, value: A) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"StateCell({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, StateCell):
            return NotImplemented
        return bool(self.value == other.value)

    __hash__ = None  # type: ignore[assignment]
