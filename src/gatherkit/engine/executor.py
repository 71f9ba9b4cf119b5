# src/gatherkit/engine/executor.py
"""Pipeline executor: drives one gatherer over one pass of a source.

A run is a small state machine:

    RUNNING --(source exhausted)--> STOPPING --(finisher)--> FINISHED
    RUNNING --(stop signaled)-----> STOPPING --(finisher)--> FINISHED

Stop is signaled cooperatively: the integrator returns False, or the
downstream rejects. Either way the remaining input is skipped and the
finisher runs exactly once.

An exception raised by the integrator, the finisher or the source iterator
aborts the run. It propagates unchanged and the finisher is NOT invoked.

Two drivers share PipelineRun:
- run_gatherer(): push-based, the caller supplies the downstream
- iter_gatherer(): pull-based lazy generator; one source element is pulled
  only after the outputs of the previous one were consumed, so an infinite
  source with a terminating gatherer never materializes
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.enums import ExecutorState, RunOutcome
from gatherkit.contracts.errors import IllegalRunStateError
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.engine.downstream import BufferDownstream, CountingDownstream

slog = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Summary of a finished run.

    Attributes:
        outcome: Whether the source was exhausted or the run short-circuited
        integrated: Number of elements handed to the integrator
        pushed: Number of outputs accepted by the downstream (finisher included)
    """

    outcome: RunOutcome
    integrated: int
    pushed: int


class PipelineRun[T, A, R]:
    """A single-use run of one gatherer against one downstream.

    The initializer is called once, on construction, so the state exists
    before the first element is integrated. The state is dropped when the
    run finishes.

    Example:
        run = PipelineRun(window_fixed(2), ListDownstream())
        for element in source:
            if not run.integrate(element):
                break
        result = run.finish()
    """

    def __init__(self, gatherer: Gatherer[T, A, R], downstream: Downstream[R]) -> None:
        self._gatherer = gatherer
        self._downstream = CountingDownstream(downstream)
        self._run_state: A | None = gatherer.initializer()
        self._state = ExecutorState.RUNNING
        self._outcome: RunOutcome | None = None
        self._failed = False
        self._integrated = 0

    @property
    def gatherer(self) -> Gatherer[T, A, R]:
        return self._gatherer

    @property
    def state(self) -> ExecutorState:
        """Current lifecycle state."""
        return self._state

    @property
    def outcome(self) -> RunOutcome | None:
        """Why the run stopped, or None while RUNNING."""
        return self._outcome

    @property
    def failed(self) -> bool:
        """True once an exception escaped the integrator or finisher."""
        return self._failed

    @property
    def run_state(self) -> A | None:
        """The gatherer state of this run (None once finished)."""
        return self._run_state

    @property
    def integrated(self) -> int:
        return self._integrated

    @property
    def pushed(self) -> int:
        return self._downstream.pushed

    def integrate(self, element: T) -> bool:
        """Integrate one element. Returns False once the run stops.

        Raises:
            IllegalRunStateError: If the run is not RUNNING or already failed
        """
        self._check_usable("integrate")
        if self._state is not ExecutorState.RUNNING:
            raise IllegalRunStateError(f"Cannot integrate in state {self._state.value!r} (gatherer={self._gatherer.name!r})")

        if self._downstream.is_rejecting():
            self._stop(RunOutcome.SHORT_CIRCUITED)
            return False

        self._integrated += 1
        try:
            keep_going = self._gatherer.integrator(self._run_state, element, self._downstream)  # type: ignore[arg-type]
        except Exception:
            self._failed = True
            raise

        if not keep_going or self._downstream.is_rejecting():
            self._stop(RunOutcome.SHORT_CIRCUITED)
            return False
        return True

    def finish(self) -> RunResult:
        """Run the finisher once and move to FINISHED.

        Finishing a RUNNING run means the source was exhausted.

        Raises:
            IllegalRunStateError: If the run already finished or failed
        """
        self._check_usable("finish")
        if self._state is ExecutorState.FINISHED:
            raise IllegalRunStateError(f"Run of gatherer {self._gatherer.name!r} already finished")
        if self._state is ExecutorState.RUNNING:
            self._stop(RunOutcome.EXHAUSTED)

        try:
            self._gatherer.finisher(self._run_state, self._downstream)  # type: ignore[arg-type]
        except Exception:
            self._failed = True
            raise

        self._state = ExecutorState.FINISHED
        self._run_state = None
        assert self._outcome is not None
        return RunResult(outcome=self._outcome, integrated=self._integrated, pushed=self._downstream.pushed)

    def _stop(self, outcome: RunOutcome) -> None:
        self._state = ExecutorState.STOPPING
        self._outcome = outcome

    def _check_usable(self, operation: str) -> None:
        if self._failed:
            raise IllegalRunStateError(f"Cannot {operation}: run of gatherer {self._gatherer.name!r} failed")


def run_gatherer[T, R](source: Iterable[T], gatherer: Gatherer[T, Any, R], downstream: Downstream[R]) -> RunResult:
    """Push every element of ``source`` through ``gatherer`` into ``downstream``.

    Args:
        source: Single-pass iterable; pulled lazily and abandoned on stop
        gatherer: The gatherer to run
        downstream: Receives the outputs

    Returns:
        RunResult describing how the run ended

    Raises:
        Exception: Whatever the integrator, finisher or source raised
    """
    run = PipelineRun(gatherer, downstream)
    slog.debug("gather_run_started", gatherer=gatherer.name, mode="push")
    try:
        for element in source:
            if not run.integrate(element):
                break
        result = run.finish()
    except Exception as exc:
        slog.warning(
            "gather_run_failed",
            gatherer=gatherer.name,
            exc_type=type(exc).__name__,
            integrated=run.integrated,
        )
        raise

    _log_finished(gatherer, result)
    return result


def iter_gatherer[T, R](source: Iterable[T], gatherer: Gatherer[T, Any, R]) -> Iterator[R]:
    """Lazily yield the outputs of ``gatherer`` applied to ``source``.

    Nothing happens until the first value is requested. If the consumer
    closes the generator before the run finishes, the run is abandoned: the
    state is dropped and the finisher is not invoked, since its outputs
    would have nobody to go to.
    """
    buffer: BufferDownstream[R] = BufferDownstream()
    run = PipelineRun(gatherer, buffer)
    result: RunResult | None = None
    slog.debug("gather_run_started", gatherer=gatherer.name, mode="pull")
    try:
        for element in source:
            keep_going = run.integrate(element)
            yield from buffer.drain()
            if not keep_going:
                break
        result = run.finish()
        yield from buffer.drain()
    except GeneratorExit:
        # Closed while draining the finisher's outputs: the run did finish
        if result is not None:
            _log_finished(gatherer, result)
        else:
            slog.debug("gather_run_abandoned", gatherer=gatherer.name, integrated=run.integrated)
        raise
    except Exception as exc:
        slog.warning(
            "gather_run_failed",
            gatherer=gatherer.name,
            exc_type=type(exc).__name__,
            integrated=run.integrated,
        )
        raise

    _log_finished(gatherer, result)


def _log_finished(gatherer: Gatherer[Any, Any, Any], result: RunResult) -> None:
    slog.debug(
        "gather_run_finished",
        gatherer=gatherer.name,
        outcome=result.outcome.value,
        integrated=result.integrated,
        pushed=result.pushed,
    )
