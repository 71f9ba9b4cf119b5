# src/gatherkit/contracts/gatherer.py
"""The gatherer descriptor: initializer, integrator, combiner, finisher.

A gatherer is a plain frozen value. It holds four callables and never any
run state; the executor asks the initializer for a fresh state at the start
of every run and threads that state through the integrator.

Shapes:
    Gatherer.of(...)             parallel-capable when given a combiner
    Gatherer.of_sequential(...)  sequential-only (no combiner)
    Gatherer.stateless(...)      no state, parallel-capable (merges with keep_left)

Example:
    def integrate(cell: StateCell[int], element: int, downstream: Downstream[int]) -> bool:
        cell.value += element
        return downstream.push(cell.value)

    running_sum = Gatherer.of_sequential(lambda: StateCell(0), integrate)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Final

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.errors import GathererConstructionError, SequentialOnlyError

type Initializer[A] = Callable[[], A]
type Integrator[A, T, R] = Callable[[A, T, Downstream[R]], bool]
type Combiner[A] = Callable[[A, A], A]
type Finisher[A, R] = Callable[[A, Downstream[R]], None]


class SequentialOnlyMarker:
    """Marker occupying the combiner slot of a sequential-only gatherer.

    This is a singleton - use the SEQUENTIAL_ONLY instance.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<SEQUENTIAL_ONLY>"


SEQUENTIAL_ONLY: Final[SequentialOnlyMarker] = SequentialOnlyMarker()


def no_state() -> None:
    """Initializer for gatherers that keep no state."""
    return None


def keep_left[A](left: A, right: A) -> A:
    """Combiner that merges by discarding the right-hand state."""
    return left


def no_op_finisher(state: Any, downstream: Downstream[Any]) -> None:
    """Finisher that emits nothing."""
    return None


@dataclass(frozen=True)
class Gatherer[T, A, R]:
    """A stateful intermediate operation over a sequence of T producing R.

    Attributes:
        initializer: Creates the state for one run (called exactly once per run)
        integrator: Consumes one element with the run state, pushes 0..n outputs,
            returns False to stop the run early
        combiner: Associative merge of two partial states, or SEQUENTIAL_ONLY
        finisher: Runs once after the last integration, may push trailing outputs
        name: Label used in logs and reprs

    Invariants:
        - initializer and integrator are callables
        - combiner is a callable or SEQUENTIAL_ONLY
        - finisher is a callable
    """

    initializer: Initializer[A] = field(repr=False)
    integrator: Integrator[A, T, R] = field(repr=False)
    combiner: Combiner[A] | SequentialOnlyMarker = field(default=SEQUENTIAL_ONLY, repr=False)
    finisher: Finisher[A, R] = field(default=no_op_finisher, repr=False)
    name: str = "gatherer"

    def __post_init__(self) -> None:
        if self.initializer is None or not callable(self.initializer):
            raise GathererConstructionError(self.name, "initializer", self.initializer, "must be callable")
        if self.integrator is None or not callable(self.integrator):
            raise GathererConstructionError(self.name, "integrator", self.integrator, "must be callable")
        if self.combiner is not SEQUENTIAL_ONLY and not callable(self.combiner):
            raise GathererConstructionError(self.name, "combiner", self.combiner, "must be callable or SEQUENTIAL_ONLY")
        if self.finisher is None or not callable(self.finisher):
            raise GathererConstructionError(self.name, "finisher", self.finisher, "must be callable")

    # === Factories ===

    @classmethod
    def of(
        cls,
        initializer: Initializer[A],
        integrator: Integrator[A, T, R],
        combiner: Combiner[A] | None = None,
        finisher: Finisher[A, R] | None = None,
        *,
        name: str = "gatherer",
    ) -> Gatherer[T, A, R]:
        """Create a gatherer, parallel-capable if a combiner is given.

        Without a combiner the gatherer is sequential-only: partial states
        cannot be merged, so it must not run on partitions.
        """
        return cls(
            initializer=initializer,
            integrator=integrator,
            combiner=SEQUENTIAL_ONLY if combiner is None else combiner,
            finisher=no_op_finisher if finisher is None else finisher,
            name=name,
        )

    @classmethod
    def of_sequential(
        cls,
        initializer: Initializer[A],
        integrator: Integrator[A, T, R],
        finisher: Finisher[A, R] | None = None,
        *,
        name: str = "gatherer",
    ) -> Gatherer[T, A, R]:
        """Create a sequential-only gatherer (no combiner)."""
        return cls(
            initializer=initializer,
            integrator=integrator,
            combiner=SEQUENTIAL_ONLY,
            finisher=no_op_finisher if finisher is None else finisher,
            name=name,
        )

    @classmethod
    def stateless(
        cls,
        integrator: Integrator[None, T, R],
        finisher: Finisher[None, R] | None = None,
        *,
        name: str = "gatherer",
    ) -> Gatherer[T, None, R]:
        """Create a stateless, parallel-capable gatherer."""
        return cls(  # type: ignore[return-value]
            initializer=no_state,
            integrator=integrator,  # type: ignore[arg-type]
            combiner=keep_left,
            finisher=no_op_finisher if finisher is None else finisher,  # type: ignore[arg-type]
            name=name,
        )

    # === Capabilities ===

    @property
    def is_parallel_capable(self) -> bool:
        """True if partial states from separate partitions can be merged."""
        return self.combiner is not SEQUENTIAL_ONLY

    def combine(self, left: A, right: A) -> A:
        """Merge two partial states with the combiner.

        Raises:
            SequentialOnlyError: If the gatherer has no combiner
        """
        if isinstance(self.combiner, SequentialOnlyMarker):
            raise SequentialOnlyError(f"Gatherer {self.name!r} is sequential-only and has no combiner")
        return self.combiner(left, right)

    # === Composition ===

    def and_then[R2](self, other: Gatherer[R, Any, R2]) -> Gatherer[T, Any, R2]:
        """Compose with another gatherer that consumes this one's outputs.

        The composed gatherer behaves as if every output of ``self`` were
        integrated by ``other`` immediately. Once ``other`` stops, further
        outputs of ``self`` are rejected and the composed run stops. Finishing
        runs ``self``'s finisher (feeding ``other``) and then ``other``'s
        finisher, each exactly once.

        The result is parallel-capable only if both parts are.
        """
        first = self
        second = other

        def initializer() -> _ComposedState:
            return _ComposedState(first.initializer(), second.initializer())

        def integrator(state: _ComposedState, element: T, downstream: Downstream[R2]) -> bool:
            if state.second_stopped:
                return False
            relay = _Relay(second, state, downstream)
            keep_going = first.integrator(state.first, element, relay)
            return bool(keep_going) and not state.second_stopped

        def finisher(state: _ComposedState, downstream: Downstream[R2]) -> None:
            first.finisher(state.first, _Relay(second, state, downstream))
            second.finisher(state.second, downstream)

        combiner: Combiner[_ComposedState] | SequentialOnlyMarker = SEQUENTIAL_ONLY
        if first.is_parallel_capable and second.is_parallel_capable:

            def combiner(left: _ComposedState, right: _ComposedState) -> _ComposedState:
                merged = _ComposedState(first.combine(left.first, right.first), second.combine(left.second, right.second))
                merged.second_stopped = left.second_stopped or right.second_stopped
                return merged

        return Gatherer(
            initializer=initializer,
            integrator=integrator,
            combiner=combiner,
            finisher=finisher,
            name=f"{first.name} -> {second.name}",
        )


class _ComposedState:
    """Run state of a gatherer built with and_then()."""

    __slots__ = ("first", "second", "second_stopped")

    def __init__(self, first: Any, second: Any) -> None:
        self.first = first
        self.second = second
        self.second_stopped = False


class _Relay:
    """Downstream that feeds the first gatherer's outputs into the second."""

    __slots__ = ("_gatherer", "_state", "_downstream")

    def __init__(self, gatherer: Gatherer[Any, Any, Any], state: _ComposedState, downstream: Downstream[Any]) -> None:
        self._gatherer = gatherer
        self._state = state
        self._downstream = downstream

    def push(self, value: Any) -> bool:
        if self._state.second_stopped:
            return False
        if not self._gatherer.integrator(self._state.second, value, self._downstream):
            self._state.second_stopped = True
            return False
        return True

    def is_rejecting(self) -> bool:
        return self._state.second_stopped or self._downstream.is_rejecting()
