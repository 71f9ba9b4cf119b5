# src/gatherkit/contracts/downstream.py
"""Downstream contract: the push target of every integrator."""

from typing import Protocol


class Downstream[R](Protocol):
    """Consumer of a gatherer's outputs.

    ``push`` returns whether the downstream still accepts values. Once it
    returns False the integrator should stop pushing and return False
    itself; further pushes are ignored.

    ``is_rejecting`` reports the same condition without pushing, so an
    integrator can skip expensive work when nothing will be accepted.
    """

    def push(self, value: R) -> bool:
        """Offer one value downstream. Returns False once no more are wanted."""
        ...

    def is_rejecting(self) -> bool:
        """Return True if the downstream will not accept further values."""
        ...
