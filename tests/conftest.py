# tests/conftest.py
"""Shared test fixtures and Hypothesis configuration.

Fixtures:
- mock_clock: MockClock starting at 0.0 for rate-limit tests
- plugin_manager: PluginManager with the built-in catalog registered
- collect: runs a gatherer over a source and returns the pushed values

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable, Iterable
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from gatherkit.contracts import Gatherer
from gatherkit.engine.clock import MockClock
from gatherkit.engine.downstream import ListDownstream
from gatherkit.engine.executor import run_gatherer
from gatherkit.plugins.manager import PluginManager


@pytest.fixture
def mock_clock() -> MockClock:
    return MockClock(start=0.0)


@pytest.fixture
def plugin_manager() -> PluginManager:
    """PluginManager with the built-in catalog registered."""
    manager = PluginManager()
    manager.register_builtin_plugins()
    return manager


def collect(source: Iterable[Any], gatherer: Gatherer[Any, Any, Any]) -> list[Any]:
    """Run gatherer over source with a collecting downstream."""
    sink: ListDownstream[Any] = ListDownstream()
    run_gatherer(source, gatherer, sink)
    return sink.items


@pytest.fixture(name="collect")
def collect_fixture() -> Callable[[Iterable[Any], Gatherer[Any, Any, Any]], list[Any]]:
    return collect


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
