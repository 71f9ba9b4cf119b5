# src/gatherkit/gatherers.py
"""Public entry point for gatherkit.

Example:
    from gatherkit.gatherers import Stream, window_fixed

    Stream(range(7)).gather(window_fixed(3)).to_list()
    # [(0, 1, 2), (3, 4, 5), (6,)]
"""

from gatherkit.contracts import Downstream, Gatherer, StateCell
from gatherkit.engine.executor import iter_gatherer, run_gatherer
from gatherkit.engine.partitioned import run_partitioned
from gatherkit.engine.stream import Stream
from gatherkit.plugins.builtin import (
    consecutive_dedup,
    distinct,
    distinct_by,
    drop_while,
    expand,
    filtering,
    fold,
    interleave,
    limit,
    mapping,
    peeking,
    rate_limited,
    scan,
    skip,
    take_until,
    take_while,
    window_fixed,
    window_sliding,
    zip_with,
    zip_with_index,
)

__all__ = [
    "Downstream",
    "Gatherer",
    "StateCell",
    "Stream",
    "consecutive_dedup",
    "distinct",
    "distinct_by",
    "drop_while",
    "expand",
    "filtering",
    "fold",
    "interleave",
    "iter_gatherer",
    "limit",
    "mapping",
    "peeking",
    "rate_limited",
    "run_gatherer",
    "run_partitioned",
    "scan",
    "skip",
    "take_until",
    "take_while",
    "window_fixed",
    "window_sliding",
    "zip_with",
    "zip_with_index",
]
