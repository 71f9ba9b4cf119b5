# src/gatherkit/plugins/protocols.py
"""Protocol for catalog gatherer plugins."""

from typing import Any, ClassVar, Protocol, runtime_checkable

from gatherkit.contracts.gatherer import Gatherer
from gatherkit.plugins.config_base import GathererConfig
from gatherkit.plugins.context import BuildContext


@runtime_checkable
class GathererPlugin(Protocol):
    """A named, config-buildable gatherer.

    Plugins are registered as classes. The manager validates the stage
    options against config_model, then calls create() with the validated
    config.

    Example:
        class WindowFixedPlugin:
            name = "window_fixed"
            config_model = WindowFixedConfig

            @classmethod
            def create(cls, config: WindowFixedConfig, context: BuildContext) -> Gatherer:
                return window_fixed(config.size)
    """

    name: ClassVar[str]
    config_model: ClassVar[type[GathererConfig]]

    @classmethod
    def create(cls, config: Any, context: BuildContext) -> Gatherer[Any, Any, Any]: ...
