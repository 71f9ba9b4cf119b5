# src/gatherkit/plugins/context.py
"""Shared inputs for building catalog gatherers."""

import threading
from dataclasses import dataclass, field

from gatherkit.core.config import RateLimitSettings
from gatherkit.engine.clock import DEFAULT_CLOCK, Clock


@dataclass(frozen=True)
class BuildContext:
    """What a plugin may need beyond its own options.

    Attributes:
        rate_limit: Defaults for rate_limited stages without an interval
        clock: Clock handed to time-dependent gatherers (MockClock in tests)
        cancel: Event that interrupts rate_limited waits, if any
    """

    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)
    clock: Clock = DEFAULT_CLOCK
    cancel: threading.Event | None = None
