# src/gatherkit/plugins/hookspecs.py
"""pluggy hook specifications for gatherkit catalog plugins.

Plugins implement these hooks to make gatherers buildable by name.

Usage (implementing a plugin):
    from gatherkit.plugins.hookspecs import hookimpl

    class MyGatherers:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def gatherkit_get_gatherers(self):
            return [MyGathererPlugin]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from gatherkit.plugins.protocols import GathererPlugin

# Project name for pluggy
PROJECT_NAME = "gatherkit"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class GatherkitGathererSpec:
    """Hook specifications for gatherer plugins."""

    @hookspec
    def gatherkit_get_gatherers(self) -> list[type["GathererPlugin"]]:  # type: ignore[empty-body]
        """Return gatherer plugin classes.

        Returns:
            List of gatherer plugin classes (not instances)
        """
