# src/gatherkit/plugins/builtin/deduplicating.py
"""Deduplicating gatherers.

distinct_by removes every repeat of a key across the whole run and keeps the
first occurrence. consecutive_dedup only collapses adjacent runs, so a value
that comes back later is emitted again.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.sentinels import NOTHING
from gatherkit.contracts.state import StateCell
from gatherkit.plugins.validation import require_callable


def _identity(element: Any) -> Any:
    return element


def distinct_by[T](key_fn: Callable[[T], Hashable]) -> Gatherer[T, set[Hashable], T]:
    """Emit an element only if its key has not been seen in this run.

    Keys must be hashable; an unhashable key raises TypeError from inside
    the run, aborting it.
    """
    require_callable("distinct_by", "key_fn", key_fn)

    def integrate(seen: set[Hashable], element: T, downstream: Downstream[T]) -> bool:
        key = key_fn(element)
        if key in seen:
            return True
        seen.add(key)
        return downstream.push(element)

    return Gatherer.of_sequential(set, integrate, name="distinct_by")


def distinct[T]() -> Gatherer[T, set[Hashable], T]:
    """distinct_by() keyed on the element itself."""
    return distinct_by(_identity)


def consecutive_dedup[T](key_fn: Callable[[T], Any] | None = None) -> Gatherer[T, StateCell[Any], T]:
    """Drop an element when it equals the element right before it.

    Args:
        key_fn: Optional key; elements compare equal when their keys do
    """
    if key_fn is not None:
        require_callable("consecutive_dedup", "key_fn", key_fn)
    key_of = _identity if key_fn is None else key_fn

    def initializer() -> StateCell[Any]:
        return StateCell(NOTHING)

    def integrate(previous: StateCell[Any], element: T, downstream: Downstream[T]) -> bool:
        key = key_of(element)
        last = previous.value
        previous.value = key
        if last is not NOTHING and last == key:
            return True
        return downstream.push(element)

    return Gatherer.of_sequential(initializer, integrate, name="consecutive_dedup")
