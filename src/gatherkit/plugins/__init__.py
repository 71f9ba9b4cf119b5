# src/gatherkit/plugins/__init__.py
"""Gatherer library and catalog.

- builtin: the built-in gatherer factories
- manager: pluggy-based catalog that builds gatherers by name from config
- hookspecs: hook definitions for third-party catalog plugins

Import the factories from gatherkit.gatherers; this package stays light so
the engine can import individual builtin modules without cycles.
"""
