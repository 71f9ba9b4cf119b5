# src/gatherkit/core/config.py
"""
Configuration schema and loading for gatherkit.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Example YAML:
    logging:
      level: INFO
      json_output: false
    rate_limit:
      default_interval_ms: 500
    pipelines:
      batches:
        stages:
          - gatherer: distinct
          - gatherer: window_fixed
            options:
              size: 3
"""

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class LoggingSettings(BaseModel):
    """Logging output configuration, passed to configure_logging()."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(default=False, description="Render JSON lines instead of console output")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class RateLimitSettings(BaseModel):
    """Defaults for rate_limited stages built from configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    default_interval_ms: int = Field(
        default=1000,
        ge=0,
        description="Minimum interval between emissions when a stage sets none",
    )


class StageSettings(BaseModel):
    """One gatherer stage of a configured pipeline.

    The gatherer name is resolved through the PluginManager catalog and the
    options are validated against that gatherer's config model.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    gatherer: str = Field(min_length=1, description="Catalog name of the gatherer")
    options: dict[str, Any] = Field(default_factory=dict, description="Gatherer-specific options")


class PipelineSettings(BaseModel):
    """A named chain of stages, composed left to right with and_then()."""

    model_config = {"frozen": True, "extra": "forbid"}

    stages: list[StageSettings] = Field(min_length=1, description="Stages in execution order")


class GatherkitSettings(BaseModel):
    """Top-level gatherkit configuration.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True}

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    pipelines: dict[str, PipelineSettings] = Field(
        default_factory=dict,
        description="Named pipelines buildable with PluginManager.build_pipeline()",
    )


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """
    import os

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2)  # None if no default specified
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            # Left as-is so validation reports the unresolved value
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> GatherkitSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (GATHERKIT_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: GATHERKIT_LOGGING__LEVEL for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated GatherkitSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="GATHERKIT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase top-level keys and mixes in its own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    raw_config = _expand_env_vars(raw_config)

    return GatherkitSettings(**raw_config)
