# src/gatherkit/engine/stream.py
"""Lazy, single-use streams built on gatherers.

Every intermediate operation is a gatherer. A chain of operations is fused
with Gatherer.and_then() into one composed gatherer, so a terminal
operation runs exactly one executor pass over the source.

Like an iterator, a stream is single-use: once an operation has been
chained onto it, or a terminal operation has consumed it, using it again
raises StreamConsumedError.

Example:
    Stream.iterate(1, lambda n: n + 1).filter(is_prime).gather(window_fixed(2)).limit(3).to_list()
    # [(2, 3), (5, 7), (11, 13)]
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from itertools import count as _count
from typing import Any

from gatherkit.contracts.enums import Grouping
from gatherkit.contracts.errors import SequentialOnlyError, StreamConsumedError
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.sentinels import NOTHING
from gatherkit.engine.downstream import CallbackDownstream, ListDownstream
from gatherkit.engine.executor import iter_gatherer, run_gatherer
from gatherkit.engine.partitioned import run_partitioned, split_partitions
from gatherkit.plugins.builtin.deduplicating import distinct
from gatherkit.plugins.builtin.limiting import drop_while, limit, skip, take_while
from gatherkit.plugins.builtin.stateless import expand, filtering, mapping, peeking


class Stream[T]:
    """A lazy sequence of elements with chained gatherer operations.

    Attributes:
        gatherer: The fused gatherer of all chained operations, or None when
            no operation was chained yet
    """

    def __init__(self, source: Iterable[T], gatherer: Gatherer[Any, Any, T] | None = None) -> None:
        self._source = source
        self._gatherer = gatherer
        self._used = False

    @property
    def gatherer(self) -> Gatherer[Any, Any, T] | None:
        return self._gatherer

    # === Factories ===

    @classmethod
    def of(cls, *items: T) -> Stream[T]:
        return cls(items)

    @classmethod
    def iterate(cls, seed: T, fn: Callable[[T], T]) -> Stream[T]:
        """Infinite stream ``seed, fn(seed), fn(fn(seed)), ...``."""

        def generate() -> Iterator[T]:
            value = seed
            while True:
                yield value
                value = fn(value)

        return cls(generate())

    @classmethod
    def generate(cls, supplier: Callable[[], T]) -> Stream[T]:
        """Infinite stream of ``supplier()`` results."""
        return cls(supplier() for _ in _count())

    # === Intermediate operations ===

    def gather[R](self, gatherer: Gatherer[T, Any, R]) -> Stream[R]:
        """Chain a gatherer after the operations already on this stream."""
        self._claim()
        fused = gatherer if self._gatherer is None else self._gatherer.and_then(gatherer)
        return Stream(self._source, fused)

    def map[R](self, fn: Callable[[T], R]) -> Stream[R]:
        return self.gather(mapping(fn))

    def filter(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return self.gather(filtering(predicate))

    def flat_map[R](self, fn: Callable[[T], Iterable[R]]) -> Stream[R]:
        return self.gather(expand(fn))

    def peek(self, action: Callable[[T], Any]) -> Stream[T]:
        return self.gather(peeking(action))

    def limit(self, max_size: int) -> Stream[T]:
        return self.gather(limit(max_size))

    def skip(self, count: int) -> Stream[T]:
        return self.gather(skip(count))

    def take_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return self.gather(take_while(predicate))

    def drop_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return self.gather(drop_while(predicate))

    def distinct(self) -> Stream[T]:
        return self.gather(distinct())

    # === Terminal operations ===

    def __iter__(self) -> Iterator[T]:
        """Lazily iterate the results; pulls the source one element at a time."""
        self._claim()
        if self._gatherer is None:
            return iter(self._source)
        return iter_gatherer(self._source, self._gatherer)

    def to_list(self) -> list[T]:
        self._claim()
        if self._gatherer is None:
            return list(self._source)
        sink: ListDownstream[T] = ListDownstream()
        run_gatherer(self._source, self._gatherer, sink)
        return sink.items

    def to_tuple(self) -> tuple[T, ...]:
        return tuple(self.to_list())

    def for_each(self, action: Callable[[T], Any]) -> None:
        """Call ``action`` on every result, in encounter order."""
        self._claim()
        if self._gatherer is None:
            for element in self._source:
                action(element)
            return

        def accept(value: T) -> None:
            # Return value of action is ignored; False must not stop the run
            action(value)

        run_gatherer(self._source, self._gatherer, CallbackDownstream(accept))

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = NOTHING) -> Any:
        """Left-fold the results with ``fn``.

        Without ``initial``, the first result is the seed and reducing an
        empty stream raises TypeError, like functools.reduce.
        """
        if initial is NOTHING:
            return functools.reduce(fn, iter(self))
        return functools.reduce(fn, iter(self), initial)

    def count(self) -> int:
        return sum(1 for _ in self)

    def first(self, default: Any = None) -> Any:
        """Return the first result, or ``default`` if there is none.

        The source is pulled only until a first result appears.
        """
        for value in self.limit(1):
            return value
        return default

    def to_list_partitioned(self, partition_count: int, grouping: Grouping | str = Grouping.LEFT) -> list[T]:
        """Collect the results, running the fused gatherer over partitions.

        The source must be finite; it is materialized and split into
        ``partition_count`` contiguous partitions. Every chained operation
        must be parallel-capable. Both are checked before the source is read.

        Raises:
            SequentialOnlyError: If the fused gatherer has no combiner
            ValueError: If partition_count < 1
        """
        self._claim()
        if partition_count < 1:
            raise ValueError(f"partition_count must be >= 1, got {partition_count}")
        if self._gatherer is None:
            return list(self._source)
        if not self._gatherer.is_parallel_capable:
            raise SequentialOnlyError(
                f"Gatherer {self._gatherer.name!r} is sequential-only and cannot run on partitions"
            )
        items = list(self._source)
        sink: ListDownstream[T] = ListDownstream()
        run_partitioned(split_partitions(items, partition_count), self._gatherer, sink, grouping=grouping)
        return sink.items

    def _claim(self) -> None:
        if self._used:
            raise StreamConsumedError("Stream has already been operated upon or consumed")
        self._used = True
