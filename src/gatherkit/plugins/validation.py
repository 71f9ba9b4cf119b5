# src/gatherkit/plugins/validation.py
"""Parameter checks shared by the built-in gatherer factories.

Every check raises GathererConstructionError so bad parameters are rejected
when the gatherer is built, before any run starts.
"""

from collections.abc import Iterable
from typing import Any

from gatherkit.contracts.errors import GathererConstructionError


def require_callable(gatherer: str, parameter: str, value: Any) -> None:
    if value is None or not callable(value):
        raise GathererConstructionError(gatherer, parameter, value, "must be callable")


def require_positive_int(gatherer: str, parameter: str, value: Any) -> None:
    # bool is an int subclass; True is not a window size
    if isinstance(value, bool) or not isinstance(value, int):
        raise GathererConstructionError(gatherer, parameter, value, "must be an int")
    if value <= 0:
        raise GathererConstructionError(gatherer, parameter, value, "must be > 0")


def require_non_negative_int(gatherer: str, parameter: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GathererConstructionError(gatherer, parameter, value, "must be an int")
    if value < 0:
        raise GathererConstructionError(gatherer, parameter, value, "must be >= 0")


def require_non_negative_number(gatherer: str, parameter: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise GathererConstructionError(gatherer, parameter, value, "must be a number")
    if value != value or value < 0:  # NaN fails value == value
        raise GathererConstructionError(gatherer, parameter, value, "must be >= 0")


def require_iterable(gatherer: str, parameter: str, value: Any) -> None:
    if not isinstance(value, Iterable):
        raise GathererConstructionError(gatherer, parameter, value, "must be iterable")
