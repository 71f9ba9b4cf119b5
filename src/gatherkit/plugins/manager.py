# src/gatherkit/plugins/manager.py
"""Plugin manager for gatherer discovery, registration, and building.

Uses pluggy for hook-based plugin registration.
"""

from functools import reduce
from typing import Any

import pluggy
import structlog

from gatherkit.contracts.errors import UnknownGathererError
from gatherkit.contracts.gatherer import Gatherer
from gatherkit.core.config import PipelineSettings
from gatherkit.plugins.context import BuildContext
from gatherkit.plugins.hookspecs import PROJECT_NAME, GatherkitGathererSpec
from gatherkit.plugins.protocols import GathererPlugin

slog = structlog.get_logger(__name__)


class PluginManager:
    """Manages gatherer plugin discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        batches = manager.create_gatherer("window_fixed", {"size": 3})
        pipeline = manager.build_pipeline(settings.pipelines["batches"])
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(GatherkitGathererSpec)

        # Cache - maps name to plugin class for duplicate detection
        self._gatherers: dict[str, type[GathererPlugin]] = {}

    def register_builtin_plugins(self) -> None:
        """Register the gatherers shipped with gatherkit.

        Call this once at startup to make built-in gatherers buildable by name.
        """
        from gatherkit.plugins.builtin.catalog import BuiltinGatherers

        self.register(BuiltinGatherers())

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If the plugin provides a gatherer name already registered
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            # Leave the manager as it was before the bad registration
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        """Refresh plugin caches from hooks.

        Raises:
            ValueError: If a gatherer with the same name is already registered
        """
        new_gatherers: dict[str, type[GathererPlugin]] = {}

        for gatherers in self._pm.hook.gatherkit_get_gatherers():
            for cls in gatherers:
                name = cls.name
                if name in new_gatherers:
                    raise ValueError(f"Duplicate gatherer plugin name: '{name}'. Already registered by {new_gatherers[name].__name__}")
                new_gatherers[name] = cls

        self._gatherers = new_gatherers

    # === Getters ===

    def get_gatherers(self) -> list[type[GathererPlugin]]:
        """Get all registered gatherer plugins."""
        return list(self._gatherers.values())

    def get_gatherer_by_name(self, name: str) -> type[GathererPlugin] | None:
        """Get gatherer plugin by name."""
        return self._gatherers.get(name)

    # === Building ===

    def create_gatherer(
        self,
        name: str,
        options: dict[str, Any] | None = None,
        context: BuildContext | None = None,
    ) -> Gatherer[Any, Any, Any]:
        """Build one gatherer from its catalog name and options.

        Raises:
            UnknownGathererError: If no plugin is registered under name
            PluginConfigError: If options fail the plugin's config model
            GathererConstructionError: If the factory rejects the values
        """
        plugin_cls = self._gatherers.get(name)
        if plugin_cls is None:
            raise UnknownGathererError(name, list(self._gatherers))
        config = plugin_cls.config_model.from_dict(options if options is not None else {})
        return plugin_cls.create(config, context if context is not None else BuildContext())

    def build_pipeline(self, pipeline: PipelineSettings, context: BuildContext | None = None) -> Gatherer[Any, Any, Any]:
        """Build every stage of a configured pipeline and compose them in order.

        Args:
            pipeline: Validated pipeline settings (at least one stage)
            context: Shared build inputs; defaults to BuildContext()

        Returns:
            A single gatherer equivalent to running the stages one after another
        """
        context = context if context is not None else BuildContext()
        stages = [self.create_gatherer(stage.gatherer, stage.options, context) for stage in pipeline.stages]
        composed = reduce(lambda left, right: left.and_then(right), stages)
        slog.debug("pipeline_built", stages=[stage.gatherer for stage in pipeline.stages], gatherer=composed.name)
        return composed
