# src/gatherkit/engine/partitioned.py
"""Partitioned execution: the combiner contract, run sequentially.

A parallel scheduler would split the source into sub-sequences, run an
independent initializer -> integrator chain per partition, and merge the
partial states with the combiner in any grouping. This module does exactly
that on the calling thread, which makes it a faithful check of a gatherer's
combiner without any threading.

Outputs pushed while integrating a partition are buffered and replayed in
partition order, so for a finite source the result is in encounter order.
The finisher runs once, on the fully merged state, never per partition.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any

import structlog

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.enums import Grouping, RunOutcome
from gatherkit.contracts.errors import SequentialOnlyError
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.engine.downstream import CountingDownstream, ListDownstream
from gatherkit.engine.executor import RunResult

slog = structlog.get_logger(__name__)


@dataclass
class _Partial:
    """Outcome of integrating one partition."""

    state: Any
    outputs: list[Any]
    integrated: int
    stopped: bool


def split_partitions[T](items: Sequence[T], count: int) -> list[list[T]]:
    """Split ``items`` into ``count`` contiguous partitions of near-equal size.

    Earlier partitions receive the remainder, and trailing partitions may be
    empty when there are fewer items than partitions.

    Raises:
        ValueError: If count < 1
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    base, extra = divmod(len(items), count)
    partitions: list[list[T]] = []
    start = 0
    for index in range(count):
        size = base + (1 if index < extra else 0)
        partitions.append(list(items[start : start + size]))
        start += size
    return partitions


def merge_states[A](gatherer: Gatherer[Any, A, Any], states: Sequence[A], grouping: Grouping | str = Grouping.LEFT) -> A:
    """Merge partial states with the gatherer's combiner.

    Raises:
        SequentialOnlyError: If the gatherer has no combiner
        ValueError: If states is empty
    """
    if not states:
        raise ValueError("merge_states() needs at least one state")
    grouping = Grouping(grouping)
    if grouping is Grouping.LEFT:
        return reduce(gatherer.combine, states)

    level = list(states)
    while len(level) > 1:
        merged = [gatherer.combine(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            merged.append(level[-1])
        level = merged
    return level[0]


def _integrate_partition(gatherer: Gatherer[Any, Any, Any], partition: Iterable[Any]) -> _Partial:
    state = gatherer.initializer()
    buffer: ListDownstream[Any] = ListDownstream()
    integrated = 0
    for element in partition:
        integrated += 1
        if not gatherer.integrator(state, element, buffer):
            return _Partial(state=state, outputs=buffer.items, integrated=integrated, stopped=True)
    return _Partial(state=state, outputs=buffer.items, integrated=integrated, stopped=False)


def run_partitioned[T, R](
    partitions: Iterable[Iterable[T]],
    gatherer: Gatherer[T, Any, R],
    downstream: Downstream[R],
    *,
    grouping: Grouping | str = Grouping.LEFT,
) -> RunResult:
    """Run ``gatherer`` over independent partitions and merge with its combiner.

    If a partition short-circuits, later partitions are not integrated, as
    their elements come after the stop in encounter order.

    Args:
        partitions: Contiguous sub-sequences of the source, in order
        gatherer: A parallel-capable gatherer
        downstream: Receives the replayed outputs, then the finisher's
        grouping: How partial states are merged (left fold or balanced tree)

    Raises:
        SequentialOnlyError: Before touching any partition, if the gatherer
            has no combiner
    """
    if not gatherer.is_parallel_capable:
        raise SequentialOnlyError(f"Gatherer {gatherer.name!r} is sequential-only and cannot run on partitions")
    grouping = Grouping(grouping)

    partials: list[_Partial] = []
    for partition in partitions:
        partial = _integrate_partition(gatherer, partition)
        partials.append(partial)
        if partial.stopped:
            break

    if partials:
        merged = merge_states(gatherer, [p.state for p in partials], grouping)
    else:
        merged = gatherer.initializer()

    counting = CountingDownstream(downstream)
    for partial in partials:
        for value in partial.outputs:
            if not counting.push(value):
                break
        if counting.is_rejecting():
            break
    gatherer.finisher(merged, counting)

    short_circuited = any(p.stopped for p in partials) or counting.is_rejecting()
    result = RunResult(
        outcome=RunOutcome.SHORT_CIRCUITED if short_circuited else RunOutcome.EXHAUSTED,
        integrated=sum(p.integrated for p in partials),
        pushed=counting.pushed,
    )
    slog.debug(
        "partitioned_run_finished",
        gatherer=gatherer.name,
        partitions=len(partials),
        grouping=grouping.value,
        outcome=result.outcome.value,
        pushed=result.pushed,
    )
    return result
