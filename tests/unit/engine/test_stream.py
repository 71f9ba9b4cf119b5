# tests/unit/engine/test_stream.py
"""Tests for Stream: chaining, fusion into one gatherer, terminal operations."""

from __future__ import annotations

import itertools
import operator
from collections.abc import Iterator

import pytest

from gatherkit.contracts import SequentialOnlyError, StreamConsumedError
from gatherkit.engine.stream import Stream
from gatherkit.plugins.builtin import fold, scan, window_fixed, window_sliding


class TestFactories:
    def test_of(self) -> None:
        assert Stream.of(1, 2, 3).to_list() == [1, 2, 3]

    def test_iterate_is_infinite_and_lazy(self) -> None:
        assert Stream.iterate(1, lambda n: n * 2).limit(5).to_list() == [1, 2, 4, 8, 16]

    def test_generate(self) -> None:
        counter = itertools.count()

        assert Stream.generate(lambda: next(counter)).limit(3).to_list() == [0, 1, 2]


class TestIntermediateOperations:
    def test_map_filter(self) -> None:
        result = Stream(range(10)).filter(lambda x: x % 2 == 0).map(lambda x: x * x).to_list()

        assert result == [0, 4, 16, 36, 64]

    def test_flat_map(self) -> None:
        assert Stream(["ab", "c"]).flat_map(list).to_list() == ["a", "b", "c"]

    def test_peek_sees_only_pulled_elements(self) -> None:
        seen: list[int] = []

        result = Stream(itertools.count()).peek(seen.append).limit(3).to_list()

        assert result == [0, 1, 2]
        assert seen == [0, 1, 2]

    def test_skip_and_limit(self) -> None:
        assert Stream(range(10)).skip(3).limit(2).to_list() == [3, 4]

    def test_take_while_and_drop_while(self) -> None:
        assert Stream([1, 2, 3, 7, 2, 1]).take_while(lambda x: x < 5).to_list() == [1, 2, 3]
        assert Stream([1, 2, 3, 7, 2, 1]).drop_while(lambda x: x < 5).to_list() == [7, 2, 1]

    def test_distinct(self) -> None:
        assert Stream(["a", "a", "b", "a", "c"]).distinct().to_list() == ["a", "b", "c"]

    def test_gather_fixed_windows(self) -> None:
        assert Stream(range(7)).gather(window_fixed(3)).to_list() == [(0, 1, 2), (3, 4, 5), (6,)]

    def test_gathers_compose(self) -> None:
        result = Stream([1, 2, 3, 4]).gather(scan(lambda: 0, operator.add)).gather(window_sliding(2)).to_list()

        assert result == [(1, 3), (3, 6), (6, 10)]

    def test_operations_fuse_into_one_gatherer(self) -> None:
        stream = Stream(range(5)).map(str).gather(window_fixed(2)).limit(1)

        assert stream.gatherer is not None
        assert stream.gatherer.name == "mapping -> window_fixed -> limit"

    def test_infinite_source_with_windows_and_limit(self) -> None:
        primes = Stream.iterate(2, lambda n: n + 1).filter(lambda n: all(n % d for d in range(2, n)))

        assert primes.gather(window_fixed(2)).limit(3).to_list() == [(2, 3), (5, 7), (11, 13)]


class TestTerminalOperations:
    def test_to_tuple(self) -> None:
        assert Stream([1, 2]).map(str).to_tuple() == ("1", "2")

    def test_iteration_is_lazy(self) -> None:
        pulled: list[int] = []

        def source():
            for i in itertools.count():
                pulled.append(i)
                yield i

        iterator = iter(Stream(source()).map(lambda x: x + 1))

        assert pulled == []
        assert next(iterator) == 1
        assert pulled == [0]

    def test_for_each(self) -> None:
        seen: list[int] = []

        Stream([1, 2, 3]).map(lambda x: -x).for_each(seen.append)

        assert seen == [-1, -2, -3]

    def test_for_each_ignores_false_returned_by_action(self) -> None:
        seen: list[int] = []

        def action(value: int) -> bool:
            seen.append(value)
            return False

        Stream([1, 2, 3]).map(lambda x: x).for_each(action)

        assert seen == [1, 2, 3]

    def test_for_each_without_operations(self) -> None:
        seen: list[int] = []

        Stream([1, 2]).for_each(seen.append)

        assert seen == [1, 2]

    def test_reduce_with_and_without_initial(self) -> None:
        assert Stream([1, 2, 3]).reduce(operator.add) == 6
        assert Stream([1, 2, 3]).reduce(operator.add, 10) == 16
        assert Stream([]).reduce(operator.add, 0) == 0

    def test_reduce_empty_without_initial_raises(self) -> None:
        with pytest.raises(TypeError):
            Stream([]).reduce(operator.add)

    def test_count(self) -> None:
        assert Stream(range(10)).filter(lambda x: x > 6).count() == 3

    def test_first(self) -> None:
        assert Stream.iterate(5, lambda n: n + 1).filter(lambda n: n % 4 == 0).first() == 8

    def test_first_of_empty_returns_default(self) -> None:
        assert Stream([]).first() is None
        assert Stream([]).first(default="none") == "none"

    def test_fold_on_empty_emits_seed(self) -> None:
        assert Stream([]).gather(fold(lambda: 0, operator.add)).to_list() == [0]


class TestSingleUse:
    def test_linked_stream_cannot_be_reused(self) -> None:
        stream = Stream([1, 2])
        stream.map(str)

        with pytest.raises(StreamConsumedError):
            stream.map(str)

    def test_consumed_stream_cannot_be_reused(self) -> None:
        stream = Stream([1, 2]).map(str)
        stream.to_list()

        with pytest.raises(StreamConsumedError):
            stream.to_list()


class TestPartitioned:
    def test_parallel_capable_chain(self) -> None:
        result = (
            Stream(range(1, 11)).map(lambda x: x * 2).gather(fold(lambda: 0, operator.add, operator.add)).to_list_partitioned(3, "tree")
        )

        assert result == [110]

    def test_sequential_chain_rejected(self) -> None:
        with pytest.raises(SequentialOnlyError):
            Stream(range(4)).gather(window_fixed(2)).to_list_partitioned(2)

    def test_no_operations_returns_items(self) -> None:
        assert Stream([3, 1]).to_list_partitioned(2) == [3, 1]

    def test_sequential_chain_rejected_before_reading_source(self) -> None:
        pulled: list[int] = []

        def source() -> Iterator[int]:
            for n in range(4):
                pulled.append(n)
                yield n

        with pytest.raises(SequentialOnlyError, match="window_fixed"):
            Stream(source()).gather(window_fixed(2)).to_list_partitioned(2)

        assert pulled == []

    def test_sequential_chain_on_infinite_source_rejected(self) -> None:
        with pytest.raises(SequentialOnlyError):
            Stream.iterate(1, lambda n: n + 1).gather(window_fixed(2)).to_list_partitioned(2)

    def test_zero_partitions_rejected_before_reading_source(self) -> None:
        pulled: list[int] = []

        def source() -> Iterator[int]:
            for n in range(4):
                pulled.append(n)
                yield n

        with pytest.raises(ValueError, match="partition_count"):
            Stream(source()).map(lambda x: x).to_list_partitioned(0)

        assert pulled == []
