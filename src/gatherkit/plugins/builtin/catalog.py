# src/gatherkit/plugins/builtin/catalog.py
"""Catalog entries for the built-in gatherers that take plain options.

Only gatherers whose parameters can be written in YAML are listed here.
Gatherers built from callables (scan, fold, distinct_by, take_while, ...)
are constructed in Python.
"""

from pydantic import Field

from gatherkit.contracts.gatherer import Gatherer
from gatherkit.plugins.builtin.deduplicating import consecutive_dedup, distinct
from gatherkit.plugins.builtin.limiting import limit, skip
from gatherkit.plugins.builtin.pairing import zip_with_index
from gatherkit.plugins.builtin.rate_limit import rate_limited
from gatherkit.plugins.builtin.windowing import window_fixed, window_sliding
from gatherkit.plugins.config_base import GathererConfig
from gatherkit.plugins.context import BuildContext
from gatherkit.plugins.hookspecs import hookimpl
from gatherkit.plugins.protocols import GathererPlugin


class WindowSizeConfig(GathererConfig):
    size: int = Field(gt=0, description="Number of elements per window")


class NoOptionsConfig(GathererConfig):
    """For gatherers without parameters; any option is rejected."""


class CountConfig(GathererConfig):
    count: int = Field(ge=0, description="Number of elements")


class RateLimitedConfig(GathererConfig):
    interval_ms: float | None = Field(
        default=None,
        ge=0,
        description="Minimum interval between emissions; falls back to rate_limit.default_interval_ms",
    )


class ZipWithIndexConfig(GathererConfig):
    start: int = Field(default=0, description="First index")


class WindowFixedPlugin:
    name = "window_fixed"
    config_model = WindowSizeConfig

    @classmethod
    def create(cls, config: WindowSizeConfig, context: BuildContext) -> Gatherer:
        return window_fixed(config.size)


class WindowSlidingPlugin:
    name = "window_sliding"
    config_model = WindowSizeConfig

    @classmethod
    def create(cls, config: WindowSizeConfig, context: BuildContext) -> Gatherer:
        return window_sliding(config.size)


class DistinctPlugin:
    name = "distinct"
    config_model = NoOptionsConfig

    @classmethod
    def create(cls, config: NoOptionsConfig, context: BuildContext) -> Gatherer:
        return distinct()


class ConsecutiveDedupPlugin:
    name = "consecutive_dedup"
    config_model = NoOptionsConfig

    @classmethod
    def create(cls, config: NoOptionsConfig, context: BuildContext) -> Gatherer:
        return consecutive_dedup()


class LimitPlugin:
    name = "limit"
    config_model = CountConfig

    @classmethod
    def create(cls, config: CountConfig, context: BuildContext) -> Gatherer:
        return limit(config.count)


class SkipPlugin:
    name = "skip"
    config_model = CountConfig

    @classmethod
    def create(cls, config: CountConfig, context: BuildContext) -> Gatherer:
        return skip(config.count)


class RateLimitedPlugin:
    name = "rate_limited"
    config_model = RateLimitedConfig

    @classmethod
    def create(cls, config: RateLimitedConfig, context: BuildContext) -> Gatherer:
        interval_ms = config.interval_ms
        if interval_ms is None:
            interval_ms = context.rate_limit.default_interval_ms
        return rate_limited(interval_ms, clock=context.clock, cancel=context.cancel)


class ZipWithIndexPlugin:
    name = "zip_with_index"
    config_model = ZipWithIndexConfig

    @classmethod
    def create(cls, config: ZipWithIndexConfig, context: BuildContext) -> Gatherer:
        return zip_with_index(config.start)


BUILTIN_GATHERER_PLUGINS: list[type[GathererPlugin]] = [
    WindowFixedPlugin,
    WindowSlidingPlugin,
    DistinctPlugin,
    ConsecutiveDedupPlugin,
    LimitPlugin,
    SkipPlugin,
    RateLimitedPlugin,
    ZipWithIndexPlugin,
]


class BuiltinGatherers:
    """Hook implementation registering the built-in catalog."""

    @hookimpl
    def gatherkit_get_gatherers(self) -> list[type[GathererPlugin]]:
        return list(BUILTIN_GATHERER_PLUGINS)
