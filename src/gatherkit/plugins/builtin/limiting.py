# src/gatherkit/plugins/builtin/limiting.py
"""Short-circuiting and skipping gatherers.

take_while stops at the first element failing the predicate and does not
emit it. take_until emits the first element matching the predicate and
then stops. drop_while skips a leading run and passes everything after it.
"""

from __future__ import annotations

from collections.abc import Callable

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.state import StateCell
from gatherkit.plugins.validation import require_callable, require_non_negative_int


def _taking() -> StateCell[bool]:
    return StateCell(True)


def take_while[T](predicate: Callable[[T], bool]) -> Gatherer[T, StateCell[bool], T]:
    """Emit elements while ``predicate`` holds; stop at the first failure."""
    require_callable("take_while", "predicate", predicate)

    def integrate(taking: StateCell[bool], element: T, downstream: Downstream[T]) -> bool:
        if not taking.value:
            return False
        if not predicate(element):
            taking.value = False
            return False
        return downstream.push(element)

    return Gatherer.of_sequential(_taking, integrate, name="take_while")


def take_until[T](predicate: Callable[[T], bool]) -> Gatherer[T, StateCell[bool], T]:
    """Emit elements up to and including the first one matching ``predicate``."""
    require_callable("take_until", "predicate", predicate)

    def integrate(taking: StateCell[bool], element: T, downstream: Downstream[T]) -> bool:
        if not taking.value:
            return False
        accepted = downstream.push(element)
        if predicate(element):
            taking.value = False
            return False
        return accepted

    return Gatherer.of_sequential(_taking, integrate, name="take_until")


def drop_while[T](predicate: Callable[[T], bool]) -> Gatherer[T, StateCell[bool], T]:
    """Skip elements while ``predicate`` holds, then emit all the rest."""
    require_callable("drop_while", "predicate", predicate)

    def initializer() -> StateCell[bool]:
        return StateCell(True)

    def integrate(dropping: StateCell[bool], element: T, downstream: Downstream[T]) -> bool:
        if dropping.value:
            if predicate(element):
                return True
            dropping.value = False
        return downstream.push(element)

    return Gatherer.of_sequential(initializer, integrate, name="drop_while")


def limit[T](max_size: int) -> Gatherer[T, StateCell[int], T]:
    """Emit at most ``max_size`` elements, stopping as soon as they are out.

    limit(0) stops on the first element without emitting it.
    """
    require_non_negative_int("limit", "max_size", max_size)

    def initializer() -> StateCell[int]:
        return StateCell(0)

    def integrate(taken: StateCell[int], element: T, downstream: Downstream[T]) -> bool:
        if taken.value >= max_size:
            return False
        taken.value += 1
        return downstream.push(element) and taken.value < max_size

    return Gatherer.of_sequential(initializer, integrate, name="limit")


def skip[T](count: int) -> Gatherer[T, StateCell[int], T]:
    """Drop the first ``count`` elements."""
    require_non_negative_int("skip", "count", count)

    def initializer() -> StateCell[int]:
        return StateCell(0)

    def integrate(skipped: StateCell[int], element: T, downstream: Downstream[T]) -> bool:
        if skipped.value < count:
            skipped.value += 1
            return True
        return downstream.push(element)

    return Gatherer.of_sequential(initializer, integrate, name="skip")
