# src/gatherkit/contracts/errors.py
"""Exception hierarchy for gatherkit.

Error taxonomy:
- Construction errors: invalid gatherer parameters, raised before any run
- Capability errors: combiner requested on a sequential-only gatherer
- Run state errors: executor or stream used outside its lifecycle
- Catalog errors: unknown gatherer names or invalid options

Failures raised by user code inside a run (integrator, key function, combine
function, expander, or the source iterator) are NOT wrapped. They propagate
unchanged to the caller and abort the run without invoking the finisher.

Sink rejection and interrupted rate-limit sleeps are cooperative stop
signals, never exceptions.
"""

from typing import Any


class GatherkitError(Exception):
    """Base class for all errors raised by gatherkit itself."""


class GathererConstructionError(GatherkitError, ValueError):
    """Raised when a gatherer is built with invalid parameters.

    Always raised at construction time, before any run starts.

    Attributes:
        gatherer: Name of the gatherer factory that rejected the parameters
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, gatherer: str, parameter: str, value: Any, reason: str) -> None:
        self.gatherer = gatherer
        self.parameter = parameter
        self.value = value
        super().__init__(f"{gatherer}: invalid {parameter}={value!r} ({reason})")


class SequentialOnlyError(GatherkitError, TypeError):
    """Raised when a gatherer without a combiner is used for partitioned runs."""


class IllegalRunStateError(GatherkitError, RuntimeError):
    """Raised when a pipeline run is driven outside its lifecycle.

    Examples: integrating after the run stopped, finishing twice.
    """


class StreamConsumedError(GatherkitError, RuntimeError):
    """Raised when a stream that was already linked or consumed is reused."""


class PluginConfigError(GatherkitError):
    """Raised when catalog options for a gatherer are invalid."""


class UnknownGathererError(GatherkitError, KeyError):
    """Raised when the catalog has no gatherer registered under a name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown gatherer {name!r}. Available: {', '.join(sorted(available)) or '(none)'}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
