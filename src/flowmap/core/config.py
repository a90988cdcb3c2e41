# src/flowmap/core/config.py
"""
Configuration schema and loading for flowmap.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

# Consumer default policy for transport payloads. The normalizer itself
# treats a missing cap as unbounded.
DEFAULT_MAX_NODES = 300
DEFAULT_MAX_EDGES = 600


class MapLimitSettings(BaseModel):
    """Truncation caps applied when building a flow map for transport.

    None means unbounded.

    Example YAML:
        limits:
          max_nodes: 300
          max_edges: 600
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_nodes: int | None = Field(
        default=DEFAULT_MAX_NODES,
        ge=1,
        description="Keep at most this many nodes (first by id)",
    )
    max_edges: int | None = Field(
        default=DEFAULT_MAX_EDGES,
        ge=1,
        description="Keep at most this many edges after endpoint filtering",
    )

    def resolve(self, max_nodes: int | None = None, max_edges: int | None = None) -> tuple[int | None, int | None]:
        """Apply per-call overrides on top of the configured caps.

        Returns:
            (max_nodes, max_edges) to pass to truncate_flow_map()
        """
        return (
            max_nodes if max_nodes is not None else self.max_nodes,
            max_edges if max_edges is not None else self.max_edges,
        )


class LoggingSettings(BaseModel):
    """Log level and renderer selection."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False


class FlowMapSettings(BaseModel):
    """Top-level flowmap configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    limits: MapLimitSettings = Field(default_factory=MapLimitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2)  # None if no default specified
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            # No env var and no default - keep original (will fail validation)
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


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> FlowMapSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FLOWMAP_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: FLOWMAP_LIMITS__MAX_NODES for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated FlowMapSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FLOWMAP",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    raw_config = _expand_env_vars(raw_config)

    return FlowMapSettings(**raw_config)
