"""Configuration management for typedbencode.

Provides centralized configuration with TOML support, validation,
and hierarchical loading from defaults → config file → environment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import toml

from typedbencode.exceptions import ConfigurationError
from typedbencode.logging_config import setup_logging
from typedbencode.models import Config

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "typedbencode.toml"

# Mapping of environment variables to config paths
ENV_MAPPINGS: dict[str, str] = {
    # Decoder
    "TYPEDBENCODE_MAX_DEPTH": "decoder.max_depth",
    "TYPEDBENCODE_MAX_INTEGER_DIGITS": "decoder.max_integer_digits",
    "TYPEDBENCODE_ALLOW_NEGATIVE_ZERO": "decoder.allow_negative_zero",
    "TYPEDBENCODE_REJECT_DUPLICATE_KEYS": "decoder.reject_duplicate_keys",
    "TYPEDBENCODE_OVERFLOW_POLICY": "decoder.overflow_policy",
    # Observability
    "TYPEDBENCODE_LOG_LEVEL": "observability.log_level",
    "TYPEDBENCODE_LOG_FILE": "observability.log_file",
    "TYPEDBENCODE_STRUCTURED_LOGGING": "observability.structured_logging",
    "TYPEDBENCODE_RICH_CONSOLE": "observability.rich_console",
}

# Config paths whose environment values are never coerced
_STRING_PATHS = frozenset({"observability.log_file"})

# Global configuration instance
_config_manager: ConfigManager | None = None


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_file: str | Path | None = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for typedbencode.toml

        """
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()

    def _find_config_file(
        self,
        config_file: str | Path | None,
    ) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        search_paths = [
            Path.cwd() / CONFIG_FILENAME,
            Path.home() / ".config" / "typedbencode" / CONFIG_FILENAME,
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def _load_config(self) -> Config:
        """Load configuration from file and environment."""
        config_data: dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data.update(toml.load(f))
            except (OSError, toml.TomlDecodeError) as e:
                logger.warning(
                    "Failed to load config file %s: %s", self.config_file, e
                )

        env_config = self._get_env_config()
        config_data = self._merge_config(config_data, env_config)

        try:
            return Config(**config_data)
        except Exception as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables."""
        env_config: dict[str, Any] = {}

        def _parse_env_value(raw: str) -> bool | int | str:
            low = raw.lower()
            if low in {"true", "yes", "on"}:
                return True
            if low in {"false", "no", "off"}:
                return False
            try:
                return int(raw)
            except ValueError:
                return raw

        def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
            parts = path.split(".")
            cur = d
            for p in parts[:-1]:
                cur = cur.setdefault(p, {})
            cur[parts[-1]] = value

        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            value = raw if cfg_path in _STRING_PATHS else _parse_env_value(raw)
            _set_nested(env_config, cfg_path, value)

        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def setup_logging(self) -> None:
        """Configure logging from the observability section."""
        setup_logging(self.config.observability)

    def export(self) -> str:
        """Export current configuration as TOML."""
        return toml.dumps(self.config.model_dump(mode="json", exclude_none=True))


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def init_config(
    config_file: str | Path | None = None,
    configure_logging: bool = False,
) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(config_file)
    if configure_logging:
        _config_manager.setup_logging()
    logger.debug(
        "Loaded configuration from %s",
        _config_manager.config_file or "defaults",
    )
    return _config_manager


def set_config(new_config: Config) -> None:
    """Replace the global configuration at runtime."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(None)
    _config_manager.config = new_config


def reset_config() -> None:
    """Drop the global configuration so the next access reloads it."""
    global _config_manager
    _config_manager = None
