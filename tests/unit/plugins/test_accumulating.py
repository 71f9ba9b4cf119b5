# tests/unit/plugins/test_accumulating.py
"""Tests for scan and fold."""

import operator

import pytest

from gatherkit.contracts import GathererConstructionError
from gatherkit.engine.downstream import ListDownstream
from gatherkit.engine.executor import run_gatherer
from gatherkit.plugins.builtin import fold, scan


class TestScan:
    def test_running_sum(self, collect) -> None:
        assert collect([1, 2, 3, 4, 5], scan(lambda: 0, operator.add)) == [1, 3, 6, 10, 15]

    def test_empty_input(self, collect) -> None:
        assert collect([], scan(lambda: 0, operator.add)) == []

    def test_seed_supplier_called_per_run(self, collect) -> None:
        gatherer = scan(list, lambda acc, x: [*acc, x])

        assert collect([1], gatherer) == [[1]]
        assert collect([2], gatherer) == [[2]]

    def test_stops_when_downstream_rejects(self) -> None:
        sink: ListDownstream[int] = ListDownstream(capacity=2)

        result = run_gatherer([1, 2, 3], scan(lambda: 0, operator.add), sink)

        assert sink.items == [1, 3]
        assert result.integrated == 2

    def test_combine_failure_propagates(self, collect) -> None:
        with pytest.raises(TypeError):
            collect([1, "x"], scan(lambda: 0, operator.add))

    def test_rejects_non_callables(self) -> None:
        with pytest.raises(GathererConstructionError, match="seed_supplier"):
            scan(0, operator.add)  # type: ignore[arg-type]
        with pytest.raises(GathererConstructionError, match="combine_fn"):
            scan(lambda: 0, None)  # type: ignore[arg-type]


class TestFold:
    def test_sum(self, collect) -> None:
        assert collect([1, 2, 3, 4, 5], fold(lambda: 0, operator.add)) == [15]

    def test_empty_input_emits_seed(self, collect) -> None:
        assert collect([], fold(lambda: 0, operator.add)) == [0]

    def test_sequential_without_merge(self) -> None:
        assert not fold(lambda: 0, operator.add).is_parallel_capable

    def test_parallel_with_merge(self) -> None:
        assert fold(lambda: 0, operator.add, operator.add).is_parallel_capable

    def test_failure_skips_final_value(self) -> None:
        sink: ListDownstream[int] = ListDownstream()

        with pytest.raises(TypeError):
            run_gatherer([1, None], fold(lambda: 0, operator.add), sink)

        assert sink.items == []

    def test_rejects_non_callable_merge(self) -> None:
        with pytest.raises(GathererConstructionError, match="merge"):
            fold(lambda: 0, operator.add, merge=3)  # type: ignore[arg-type]
