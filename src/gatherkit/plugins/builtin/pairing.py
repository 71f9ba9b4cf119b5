# src/gatherkit/plugins/builtin/pairing.py
"""Pairing gatherers: zip with an index or with a second sequence, interleave.

The second sequence is re-iterated in every run's initializer, so a list or
range can back any number of runs. A one-shot iterator is consumed by the
first run that uses it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.errors import GathererConstructionError
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.sentinels import NOTHING
from gatherkit.contracts.state import StateCell
from gatherkit.plugins.validation import require_iterable


def zip_with_index[T](start: int = 0) -> Gatherer[T, StateCell[int], tuple[int, T]]:
    """Emit ``(index, element)`` pairs, counting from ``start``."""
    if isinstance(start, bool) or not isinstance(start, int):
        raise GathererConstructionError("zip_with_index", "start", start, "must be an int")

    def initializer() -> StateCell[int]:
        return StateCell(start)

    def integrate(index: StateCell[int], element: T, downstream: Downstream[tuple[int, T]]) -> bool:
        position = index.value
        index.value += 1
        return downstream.push((position, element))

    return Gatherer.of_sequential(initializer, integrate, name="zip_with_index")


def zip_with[T, U](other: Iterable[U]) -> Gatherer[T, Iterator[U], tuple[T, U]]:
    """Emit ``(element, partner)`` pairs; stop when ``other`` runs out.

    The element that finds no partner is not emitted.
    """
    require_iterable("zip_with", "other", other)

    def initializer() -> Iterator[U]:
        return iter(other)

    def integrate(partners: Iterator[U], element: T, downstream: Downstream[tuple[T, U]]) -> bool:
        partner = next(partners, NOTHING)
        if partner is NOTHING:
            return False
        return downstream.push((element, partner))  # type: ignore[arg-type]

    return Gatherer.of_sequential(initializer, integrate, name="zip_with")


def interleave[T](other: Iterable[T]) -> Gatherer[T, Iterator[T], T]:
    """Alternate source elements with elements of ``other``.

    Emits ``s0, o0, s1, o1, ...``. Once ``other`` is exhausted the source
    passes through alone; if the source ends first, the finisher drains the
    rest of ``other`` while the downstream accepts. An infinite ``other``
    therefore needs a downstream limit.
    """
    require_iterable("interleave", "other", other)

    def initializer() -> Iterator[T]:
        return iter(other)

    def integrate(partners: Iterator[T], element: T, downstream: Downstream[T]) -> bool:
        if not downstream.push(element):
            return False
        partner = next(partners, NOTHING)
        if partner is NOTHING:
            return True
        return downstream.push(partner)  # type: ignore[arg-type]

    def finish(partners: Iterator[T], downstream: Downstream[T]) -> None:
        if downstream.is_rejecting():
            return
        for partner in partners:
            if not downstream.push(partner):
                return

    return Gatherer.of_sequential(initializer, integrate, finish, name="interleave")
