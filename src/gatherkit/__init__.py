# src/gatherkit/__init__.py
"""
gatherkit: Stateful, composable intermediate operations for lazy sequences.

A gatherer carries its own state across elements, can emit zero, one or
many outputs per input, and can short-circuit a run cooperatively.
"""

__version__ = "0.1.0"
