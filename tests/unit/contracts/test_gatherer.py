# tests/unit/contracts/test_gatherer.py
"""Tests for the Gatherer descriptor: construction, capability, composition."""

from __future__ import annotations

import operator
from typing import Any

import pytest

from gatherkit.contracts import (
    SEQUENTIAL_ONLY,
    Downstream,
    Gatherer,
    GathererConstructionError,
    SequentialOnlyError,
    StateCell,
    keep_left,
    no_op_finisher,
)
from gatherkit.engine.downstream import ListDownstream
from gatherkit.engine.partitioned import run_partitioned
from gatherkit.plugins.builtin import fold, limit, mapping, scan, window_fixed


def _passthrough(state: Any, element: Any, downstream: Downstream[Any]) -> bool:
    return downstream.push(element)


class TestConstruction:
    """Construction validates the four functions."""

    def test_none_initializer_rejected(self) -> None:
        with pytest.raises(GathererConstructionError, match="initializer"):
            Gatherer.of_sequential(None, _passthrough)  # type: ignore[arg-type]

    def test_non_callable_integrator_rejected(self) -> None:
        with pytest.raises(GathererConstructionError, match="integrator"):
            Gatherer.of_sequential(list, "not callable")  # type: ignore[arg-type]

    def test_non_callable_combiner_rejected(self) -> None:
        with pytest.raises(GathererConstructionError, match="combiner"):
            Gatherer(initializer=list, integrator=_passthrough, combiner=42)  # type: ignore[arg-type]

    def test_none_finisher_rejected(self) -> None:
        with pytest.raises(GathererConstructionError, match="finisher"):
            Gatherer(initializer=list, integrator=_passthrough, finisher=None)  # type: ignore[arg-type]

    def test_construction_error_is_value_error(self) -> None:
        """Callers catching ValueError also see construction errors."""
        with pytest.raises(ValueError):
            Gatherer.of_sequential(None, _passthrough)  # type: ignore[arg-type]

    def test_construction_error_carries_details(self) -> None:
        with pytest.raises(GathererConstructionError) as exc_info:
            Gatherer.of_sequential(list, None, name="custom")  # type: ignore[arg-type]

        assert exc_info.value.gatherer == "custom"
        assert exc_info.value.parameter == "integrator"
        assert exc_info.value.value is None


class TestFactories:
    def test_of_without_combiner_is_sequential_only(self) -> None:
        gatherer = Gatherer.of(list, _passthrough)

        assert gatherer.combiner is SEQUENTIAL_ONLY
        assert gatherer.finisher is no_op_finisher
        assert not gatherer.is_parallel_capable

    def test_of_without_combiner_rejected_on_partitions(self) -> None:
        """A stateful gatherer with no combiner must not silently drop partial states."""

        def count(cell: StateCell[int], element: Any, downstream: Downstream[int]) -> bool:
            cell.value += 1
            return True

        def push_count(cell: StateCell[int], downstream: Downstream[int]) -> None:
            downstream.push(cell.value)

        gatherer = Gatherer.of(lambda: StateCell(0), count, finisher=push_count, name="count")

        with pytest.raises(SequentialOnlyError, match="count"):
            run_partitioned([[1, 2, 3], [4, 5, 6]], gatherer, ListDownstream())

    def test_of_keeps_explicit_combiner(self) -> None:
        gatherer = Gatherer.of(list, _passthrough, operator.add)

        assert gatherer.combine([1], [2]) == [1, 2]

    def test_of_sequential_has_no_combiner(self) -> None:
        gatherer = Gatherer.of_sequential(list, _passthrough)

        assert gatherer.combiner is SEQUENTIAL_ONLY
        assert not gatherer.is_parallel_capable

    def test_stateless_has_no_state_and_is_parallel(self) -> None:
        gatherer = Gatherer.stateless(_passthrough)

        assert gatherer.initializer() is None
        assert gatherer.is_parallel_capable

    def test_name_used_in_repr(self) -> None:
        gatherer = Gatherer.stateless(_passthrough, name="passthrough")

        assert "passthrough" in repr(gatherer)

    def test_gatherer_is_frozen(self) -> None:
        gatherer = Gatherer.stateless(_passthrough)

        with pytest.raises(AttributeError):
            gatherer.name = "other"  # type: ignore[misc]


class TestCombine:
    def test_combine_on_sequential_only_raises(self) -> None:
        with pytest.raises(SequentialOnlyError, match="window_fixed"):
            window_fixed(2).combine([1], [2])

    def test_keep_left_discards_right(self) -> None:
        gatherer = Gatherer.of(lambda: StateCell(0), _passthrough, keep_left)

        assert gatherer.combine(StateCell(1), StateCell(2)) == StateCell(1)

    def test_fold_with_merge_combines_values(self) -> None:
        gatherer = fold(lambda: 0, operator.add, operator.add)

        assert gatherer.combine(StateCell(3), StateCell(4)) == StateCell(7)


class TestAndThen:
    """a.and_then(b) behaves like running a and feeding its outputs into b."""

    def test_composition_chains_outputs(self, collect) -> None:
        composed = mapping(lambda x: x * 10).and_then(window_fixed(2))

        assert collect([1, 2, 3], composed) == [(10, 20), (30,)]

    def test_composed_name_joins_parts(self) -> None:
        composed = scan(lambda: 0, operator.add).and_then(limit(2))

        assert composed.name == "scan -> limit"

    def test_second_stop_stops_composed_run(self, collect) -> None:
        pulled: list[int] = []

        def source():
            for i in range(100):
                pulled.append(i)
                yield i

        composed = mapping(lambda x: x).and_then(limit(3))

        assert collect(source(), composed) == [0, 1, 2]
        assert pulled == [0, 1, 2]

    def test_first_finisher_feeds_second_then_second_finishes(self, collect) -> None:
        """window_fixed flushes its tail into fold, then fold emits once."""
        composed = window_fixed(2).and_then(fold(list, lambda acc, w: [*acc, len(w)]))

        assert collect([1, 2, 3, 4, 5], composed) == [[2, 2, 1]]

    def test_parallel_capable_only_if_both_parts_are(self) -> None:
        parallel = mapping(str).and_then(mapping(len))
        mixed = mapping(str).and_then(window_fixed(2))

        assert parallel.is_parallel_capable
        assert not mixed.is_parallel_capable

    def test_composed_finishers_each_run_once(self, collect) -> None:
        calls: list[str] = []

        def finisher_for(label: str):
            def finish(state: Any, downstream: Downstream[Any]) -> None:
                calls.append(label)

            return finish

        first = Gatherer.stateless(_passthrough, finisher_for("first"))
        second = Gatherer.stateless(_passthrough, finisher_for("second"))

        collect([1, 2], first.and_then(second))

        assert calls == ["first", "second"]
