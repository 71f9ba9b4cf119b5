# src/gatherkit/plugins/builtin/rate_limit.py
"""Rate-limiting gatherer: keep a minimum interval between emissions.

The integrator blocks the calling thread (through the clock) until the
interval since the previous emission has elapsed, then pushes. The recorded
emission time is read after the wait, so sleep overshoot never accumulates
into drift.

Cancellation: pass a threading.Event. If it is set while the integrator is
waiting, or before an element is emitted, the run stops without pushing the
pending element. Cancellation is a stop signal, not an error.
"""

from __future__ import annotations

import threading

import structlog

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.contracts.state import StateCell
from gatherkit.engine.clock import DEFAULT_CLOCK, Clock
from gatherkit.plugins.validation import require_non_negative_number

slog = structlog.get_logger(__name__)


def rate_limited[T](
    interval_ms: float,
    *,
    clock: Clock | None = None,
    cancel: threading.Event | None = None,
) -> Gatherer[T, StateCell[float | None], T]:
    """Emit elements no faster than one per ``interval_ms`` milliseconds.

    The first element is emitted immediately. interval_ms=0 disables
    throttling.

    Args:
        interval_ms: Minimum interval between emissions, in milliseconds
        clock: Time source and sleeper; defaults to the system clock
        cancel: Optional event that interrupts a pending wait

    Raises:
        GathererConstructionError: If interval_ms is negative or not a number
    """
    require_non_negative_number("rate_limited", "interval_ms", interval_ms)
    interval = interval_ms / 1000.0
    active_clock = clock if clock is not None else DEFAULT_CLOCK

    def initializer() -> StateCell[float | None]:
        return StateCell(None)

    def integrate(last_emission: StateCell[float | None], element: T, downstream: Downstream[T]) -> bool:
        if cancel is not None and cancel.is_set():
            slog.info("rate_limit_interrupted", interval_ms=interval_ms, waited=False)
            return False

        if last_emission.value is not None:
            remaining = interval - (active_clock.monotonic() - last_emission.value)
            if remaining > 0:
                slog.debug("rate_limit_throttled", interval_ms=interval_ms, delay_seconds=remaining)
                if not active_clock.sleep(remaining, cancel):
                    slog.info("rate_limit_interrupted", interval_ms=interval_ms, waited=True)
                    return False

        last_emission.value = active_clock.monotonic()
        return downstream.push(element)

    return Gatherer.of_sequential(initializer, integrate, name="rate_limited")
