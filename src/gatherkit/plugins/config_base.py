# src/gatherkit/plugins/config_base.py
"""Base class for typed gatherer options.

Catalog plugins declare a GathererConfig subclass as their config_model.
Options coming from YAML are validated against it before the gatherer is
built, so a typo in a stage's options fails at build time.

Example:
    class WindowFixedConfig(GathererConfig):
        size: int = Field(gt=0)

    cfg = WindowFixedConfig.from_dict({"size": 3})
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError

from gatherkit.contracts.errors import PluginConfigError


class GathererConfig(BaseModel):
    """Base class for typed gatherer configurations."""

    model_config = {"frozen": True, "extra": "forbid"}  # Reject unknown fields

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")

        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e
