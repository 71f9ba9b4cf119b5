# src/gatherkit/contracts/__init__.py
"""Shared contracts: the gatherer descriptor and the types around it.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes live in gatherkit.core.config and are NOT re-exported here.

Import patterns:
    from gatherkit.contracts import Gatherer, StateCell, Downstream
    from gatherkit.core.config import GatherkitSettings
"""

from gatherkit.contracts.downstream import Downstream
from gatherkit.contracts.enums import ExecutorState, Grouping, RunOutcome
from gatherkit.contracts.errors import (
    GathererConstructionError,
    GatherkitError,
    IllegalRunStateError,
    PluginConfigError,
    SequentialOnlyError,
    StreamConsumedError,
    UnknownGathererError,
)
from gatherkit.contracts.gatherer import (
    SEQUENTIAL_ONLY,
    Combiner,
    Finisher,
    Gatherer,
    Initializer,
    Integrator,
    SequentialOnlyMarker,
    keep_left,
    no_op_finisher,
    no_state,
)
from gatherkit.contracts.sentinels import NOTHING, NothingSentinel
from gatherkit.contracts.state import StateCell

__all__ = [
    "NOTHING",
    "SEQUENTIAL_ONLY",
    "Combiner",
    "Downstream",
    "ExecutorState",
    "Finisher",
    "Gatherer",
    "GathererConstructionError",
    "GatherkitError",
    "Grouping",
    "IllegalRunStateError",
    "Initializer",
    "Integrator",
    "NothingSentinel",
    "PluginConfigError",
    "RunOutcome",
    "SequentialOnlyError",
    "SequentialOnlyMarker",
    "StateCell",
    "StreamConsumedError",
    "UnknownGathererError",
    "keep_left",
    "no_op_finisher",
    "no_state",
]
