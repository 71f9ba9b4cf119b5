# src/gatherkit/plugins/builtin/__init__.py
"""Built-in gatherer factories."""

from gatherkit.plugins.builtin.accumulating import fold, scan
from gatherkit.plugins.builtin.deduplicating import consecutive_dedup, distinct, distinct_by
from gatherkit.plugins.builtin.limiting import drop_while, limit, skip, take_until, take_while
from gatherkit.plugins.builtin.pairing import interleave, zip_with, zip_with_index
from gatherkit.plugins.builtin.rate_limit import rate_limited
from gatherkit.plugins.builtin.stateless import expand, filtering, mapping, peeking
from gatherkit.plugins.builtin.windowing import window_fixed, window_sliding

__all__ = [
    "consecutive_dedup",
    "distinct",
    "distinct_by",
    "drop_while",
    "expand",
    "filtering",
    "fold",
    "interleave",
    "limit",
    "mapping",
    "peeking",
    "rate_limited",
    "scan",
    "skip",
    "take_until",
    "take_while",
    "window_fixed",
    "window_sliding",
    "zip_with",
    "zip_with_index",
]
