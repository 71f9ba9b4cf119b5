# src/gatherkit/contracts/sentinels.py
"""Sentinel values for gatherer state.

Gatherers that remember "the previous element" need to tell apart "nothing
seen yet" from "the previous element was None". NOTHING fills that role.

Example usage:
    from gatherkit.contracts.sentinels import NOTHING

    cell = StateCell(NOTHING)
    if cell.value is NOTHING:
        # First element of the run
        ...
"""

from typing import Final


class NothingSentinel:
    """Sentinel class marking the absence of a value.

    This is a singleton - use the NOTHING instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<NOTHING>"

    def __bool__(self) -> bool:
        return False


NOTHING: Final[NothingSentinel] = NothingSentinel()
"""Singleton sentinel indicating no value has been recorded.

Use identity comparison: `if value is NOTHING:`
"""
