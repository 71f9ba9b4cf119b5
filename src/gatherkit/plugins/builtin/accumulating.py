# src/gatherkit/plugins/builtin/accumulating.py
"""Accumulating gatherers: scan (running values) and fold (single result).

scan emits one value per input; fold emits exactly one value per run.

fold on an empty input emits the seed: the finisher always pushes the
accumulated value, whether or not any element arrived.
"""

from __future__ import annotations

from collections.abc import Callable

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.state import StateCell
from gatherkit.plugins.validation import require_callable


def scan[T, A](seed_supplier: Callable[[], A], combine_fn: Callable[[A, T], A]) -> Gatherer[T, StateCell[A], A]:
    """Emit the running accumulation after every element.

    Example:
        Stream([1, 2, 3]).gather(scan(lambda: 0, operator.add)).to_list()
        # [1, 3, 6]
    """
    require_callable("scan", "seed_supplier", seed_supplier)
    require_callable("scan", "combine_fn", combine_fn)

    def initializer() -> StateCell[A]:
        return StateCell(seed_supplier())

    def integrate(cell: StateCell[A], element: T, downstream: Downstream[A]) -> bool:
        cell.value = combine_fn(cell.value, element)
        return downstream.push(cell.value)

    return Gatherer.of_sequential(initializer, integrate, name="scan")


def fold[T, A](
    seed_supplier: Callable[[], A],
    combine_fn: Callable[[A, T], A],
    merge: Callable[[A, A], A] | None = None,
) -> Gatherer[T, StateCell[A], A]:
    """Accumulate silently and emit the final value once the run ends.

    Args:
        seed_supplier: Creates the starting value (called once per run and
            once per partition in partitioned runs)
        combine_fn: Folds one element into the accumulated value
        merge: Optional associative merge of two partial accumulations.
            When given, the fold is parallel-capable.

    Example:
        Stream([1, 2, 3]).gather(fold(lambda: 0, operator.add)).to_list()
        # [6]
        Stream([]).gather(fold(lambda: 0, operator.add)).to_list()
        # [0]
    """
    require_callable("fold", "seed_supplier", seed_supplier)
    require_callable("fold", "combine_fn", combine_fn)
    if merge is not None:
        require_callable("fold", "merge", merge)

    def initializer() -> StateCell[A]:
        return StateCell(seed_supplier())

    def integrate(cell: StateCell[A], element: T, downstream: Downstream[A]) -> bool:
        cell.value = combine_fn(cell.value, element)
        return True

    def finish(cell: StateCell[A], downstream: Downstream[A]) -> None:
        downstream.push(cell.value)

    if merge is None:
        return Gatherer.of_sequential(initializer, integrate, finish, name="fold")

    def combiner(left: StateCell[A], right: StateCell[A]) -> StateCell[A]:
        return StateCell(merge(left.value, right.value))

    return Gatherer.of(initializer, integrate, combiner, finish, name="fold")
