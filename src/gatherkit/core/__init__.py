# src/gatherkit/core/__init__.py
"""Core infrastructure: Configuration and Logging."""

from gatherkit.core.config import (
    GatherkitSettings,
    LoggingSettings,
    PipelineSettings,
    RateLimitSettings,
    StageSettings,
    load_settings,
)
from gatherkit.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "GatherkitSettings",
    "LoggingSettings",
    "PipelineSettings",
    "RateLimitSettings",
    "StageSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
