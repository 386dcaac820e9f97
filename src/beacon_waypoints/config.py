"""
Configuration for the waypoint registry.

Hierarchical configuration precedence: Environment > JSON file > Defaults.

Usage:
    from beacon_waypoints.config import get_config

    config = get_config()
    if config.thread_safe:
        ...
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_SECTION = 'waypoints'


class WaypointRegistryConfig:
    """
    Registry configuration with layered loading:
    1. Defaults
    2. JSON config file
    3. Environment variables (highest priority)
    """

    DEFAULTS: Dict[str, Any] = {
        # Guard every registry operation with a re-entrant lock
        'thread_safe': True,

        # Logging and debug
        'debug_mode': False,
        'verbose_logging': False,
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None, env_prefix: str = 'WAYPOINTS_'):
        """
        Args:
            config_file: Optional path to a JSON config file. Falls back to
                the WAYPOINTS_CONFIG_FILE environment variable.
            env_prefix: Prefix for environment overrides (WAYPOINTS_<KEY>).
        """
        self._config: Dict[str, Any] = {}
        self._config_file = config_file or os.getenv(f'{env_prefix}CONFIG_FILE')
        self._env_prefix = env_prefix

        self._load_configuration()

    def _load_configuration(self):
        """Load configuration from all sources in priority order."""
        self._config = self.DEFAULTS.copy()

        self._load_from_json_config()
        self._load_from_environment()
        self._validate_config()

        if self.debug_mode:
            logger.info("Waypoint registry configuration loaded successfully")

    def _load_from_json_config(self):
        """Load configuration from the JSON config file, if any."""
        if not self._config_file:
            return

        config_path = Path(self._config_file)
        if not config_path.exists():
            logger.debug(f"No config file found at {config_path}")
            return

        try:
            with open(config_path, 'r') as f:
                json_config = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load JSON config from {config_path}: {e}")
            return

        if not isinstance(json_config, dict):
            logger.warning(f"Ignoring JSON config {config_path}: top level must be an object")
            return

        # Shared config files keep registry settings under their own section
        section = json_config.get(CONFIG_SECTION, json_config)
        if not isinstance(section, dict):
            logger.warning(f"Ignoring JSON config {config_path}: '{CONFIG_SECTION}' must be an object")
            return

        # Filter out comment keys (starting with _)
        filtered_config = {
            k: v for k, v in section.items()
            if not k.startswith('_')
        }

        self._config.update(filtered_config)
        logger.debug(f"Loaded JSON config from {config_path}")

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        for key in self._config.keys():
            env_key = f"{self._env_prefix}{key.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                converted_value = self._convert_env_value(env_value, self._config[key])
                self._config[key] = converted_value
                logger.debug(f"Loaded environment variable: {env_key} = {converted_value}")

    def _convert_env_value(self, env_value: str, default_value: Any) -> Any:
        """Convert environment variable string to the type of the current value."""
        if isinstance(default_value, bool):
            return env_value.lower() in ('true', '1', 'yes', 'on')
        return env_value

    def _validate_config(self):
        for key in ('thread_safe', 'debug_mode', 'verbose_logging'):
            if not isinstance(self._config.get(key), bool):
                logger.warning(f"Invalid {key} {self._config.get(key)!r}, using {self.DEFAULTS[key]}")
                self._config[key] = self.DEFAULTS[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set configuration value (runtime only)."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    def reload(self):
        """Reload configuration from all sources."""
        self._load_configuration()

    @property
    def thread_safe(self) -> bool:
        return self._config.get('thread_safe', True)

    @property
    def debug_mode(self) -> bool:
        return self._config.get('debug_mode', False)

    @property
    def verbose_logging(self) -> bool:
        return self._config.get('verbose_logging', False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {len(self._config)} settings>"


_config_instance: Optional[WaypointRegistryConfig] = None


def get_config() -> WaypointRegistryConfig:
    """Get the process-wide registry configuration."""
    global _config_instance
    if _config_instance is None:
        _config_instance = WaypointRegistryConfig()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
