# src/gatherkit/plugins/builtin/stateless.py
"""Stateless gatherers: one-to-one, one-to-optional and one-to-many.

These carry no state, so they are parallel-capable. Stream builds its
map/filter/flat_map/peek operations from them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.plugins.validation import require_callable


def mapping[T, R](fn: Callable[[T], R]) -> Gatherer[T, None, R]:
    """Emit ``fn(element)`` for every element."""
    require_callable("mapping", "fn", fn)

    def integrate(_: None, element: T, downstream: Downstream[R]) -> bool:
        return downstream.push(fn(element))

    return Gatherer.stateless(integrate, name="mapping")


def filtering[T](predicate: Callable[[T], bool]) -> Gatherer[T, None, T]:
    """Emit the elements for which ``predicate`` holds."""
    require_callable("filtering", "predicate", predicate)

    def integrate(_: None, element: T, downstream: Downstream[T]) -> bool:
        if predicate(element):
            return downstream.push(element)
        return True

    return Gatherer.stateless(integrate, name="filtering")


def peeking[T](action: Callable[[T], Any]) -> Gatherer[T, None, T]:
    """Call ``action`` on every element and pass it through unchanged."""
    require_callable("peeking", "action", action)

    def integrate(_: None, element: T, downstream: Downstream[T]) -> bool:
        action(element)
        return downstream.push(element)

    return Gatherer.stateless(integrate, name="peeking")


def expand[T, R](expander_fn: Callable[[T], Iterable[R]]) -> Gatherer[T, None, R]:
    """Emit every value produced by ``expander_fn(element)``, in order.

    If the downstream rejects a value, the rest of that element's expansion
    is dropped without advancing the expander's iterator, and the run stops.
    """
    require_callable("expand", "expander_fn", expander_fn)

    def integrate(_: None, element: T, downstream: Downstream[R]) -> bool:
        for value in expander_fn(element):
            if not downstream.push(value):
                return False
        return True

    return Gatherer.stateless(integrate, name="expand")
