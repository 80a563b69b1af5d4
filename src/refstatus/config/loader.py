"""Configuration loader for refstatus.

Configuration precedence (highest to lowest):
1. Environment variables (REFSTATUS_*)
2. YAML configuration file
3. Built-in defaults
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from refstatus.lib.errors import ConfigError
from refstatus.models.config import StatusConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "REFSTATUS_CONFIG"
DEFAULT_CONFIG_FILENAMES = ("refstatus.yml", "refstatus.yaml")

# Environment variable to (section, field) mapping; section None is top-level
ENV_VAR_MAP: dict[str, tuple[str | None, str]] = {
    "REFSTATUS_PROVIDER_API_URL": ("provider", "api_url"),
    "REFSTATUS_PROVIDER_TOKEN": ("provider", "token"),
    "REFSTATUS_PROVIDER_TIMEOUT": ("provider", "timeout"),
    "REFSTATUS_CACHE_ENABLED": ("cache", "enabled"),
    "REFSTATUS_WARN_PRODUCTION_ONLY_REFERENCE": (
        None,
        "warn_production_only_reference",
    ),
}

_BOOL_FIELDS = {"enabled", "warn_production_only_reference"}
_FLOAT_FIELDS = {"timeout"}


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to the field's type.

    Raises:
        ValueError: If value cannot be parsed
    """
    if field_name in _FLOAT_FIELDS:
        return float(value)
    if field_name in _BOOL_FIELDS:
        return value.lower() in ("true", "1", "yes", "on")
    return value


def _flatten_errors(exc: PydanticValidationError) -> str:
    """Render a pydantic ValidationError as one line per field."""
    lines = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(item) for item in loc) if loc else "unknown"
        lines.append(f"Field '{field_path}': {error.get('msg', 'Unknown error')}")
    return "\n".join(lines) if lines else "Validation failed with unknown error"


class ConfigLoader:
    """Loads and validates refstatus configuration.

    Example:
        >>> config = ConfigLoader().load("refstatus.yml")
        >>> config.provider.api_url
        'https://api.github.com'
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the loader.

        Args:
            env: Environment mapping; defaults to ``os.environ``
        """
        self._env = os.environ if env is None else env

    def parse_yaml(self, file_path: str | Path) -> dict[str, Any]:
        """Parse a YAML file and return its contents as a dictionary.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(
                "config_file",
                f"Configuration file not found at {path}. "
                f"Please ensure the file exists at this path.",
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                "yaml_parse", f"Failed to parse YAML file {path}: {e}"
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(
                "yaml_parse", f"Expected a mapping at the top of {path}"
            )
        return content

    def find_config_file(self, search_dir: str | Path | None = None) -> Path | None:
        """Locate the configuration file.

        ``REFSTATUS_CONFIG`` wins; otherwise ``refstatus.yml`` then
        ``refstatus.yaml`` in ``search_dir`` (default: current directory).
        """
        explicit = self._env.get(CONFIG_PATH_ENV_VAR)
        if explicit:
            return Path(explicit)

        base = Path(search_dir) if search_dir else Path.cwd()
        for filename in DEFAULT_CONFIG_FILENAMES:
            candidate = base / filename
            if candidate.exists():
                return candidate
        return None

    def apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply REFSTATUS_* environment variables on top of a config dict.

        Invalid values are logged and ignored.
        """
        merged = {
            key: dict(value) if isinstance(value, dict) else value
            for key, value in config.items()
        }
        for env_var, (section, field_name) in ENV_VAR_MAP.items():
            if env_var not in self._env:
                continue
            try:
                value = _parse_env_value(field_name, self._env[env_var])
            except ValueError:
                logger.warning(
                    f"Ignoring invalid value for {env_var}: {self._env[env_var]!r}"
                )
                continue

            if section is None:
                merged[field_name] = value
            else:
                target = merged.setdefault(section, {})
                if not isinstance(target, dict):
                    raise ConfigError(section, "Expected a mapping")
                target[field_name] = value
        return merged

    def load(self, file_path: str | Path | None = None) -> StatusConfig:
        """Load, merge and validate configuration.

        Args:
            file_path: Explicit YAML path; discovered when omitted

        Returns:
            Validated StatusConfig

        Raises:
            ConfigError: If the file is unreadable or the config is invalid
        """
        path = Path(file_path) if file_path else self.find_config_file()
        raw: dict[str, Any] = self.parse_yaml(path) if path else {}
        if path:
            logger.debug(f"Loaded refstatus configuration from {path}")

        merged = self.apply_env_overrides(raw)
        try:
            return StatusConfig(**merged)
        except PydanticValidationError as e:
            source = str(path) if path else "environment"
            raise ConfigError(
                "config_validation",
                f"Invalid refstatus configuration in {source}:\n{_flatten_errors(e)}",
            ) from e
