# src/sensei/managers/config_manager.py
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from sensei.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "debug": {"level": "INFO"},
    "ai": {"api_key": "", "model": "gemini-pro"},
    "cache": {"ttl_seconds": 1800},
    "scores": {"file_performance": 80},
    "server": {"host": "127.0.0.1", "port": 5000},
}

# environment variable -> dotted config path
ENV_OVERRIDES = {
    "SENSEI_AI_API_KEY": "ai.api_key",
    "SENSEI_AI_MODEL": "ai.model",
    "SENSEI_LOG_LEVEL": "debug.level",
    "SENSEI_CACHE_TTL": "cache.ttl_seconds",
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merges override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    Built-in defaults are overlaid with settings.json and then with
    SENSEI_* environment variables.
    """
    _instance = None

    def __new__(cls, settings_path: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize(settings_path)
        return cls._instance

    def _initialize(self, settings_path: Optional[Path]):
        self._config: Dict[str, Any] = {}
        self.settings_path = settings_path or PathUtils.get_settings_file()
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'cache.ttl_seconds'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration, cast to the type
        of the value it replaces when possible.
        e.g., 'debug.level', 'DEBUG'
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        original_value = d.get(keys[-1])
        if original_value is not None:
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as given.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.debug("Configuration updated: %s", key_path)
        return True

    def reset(self):
        """Rebuilds the in-memory configuration from defaults, settings.json and the environment."""
        self._config = _merge(DEFAULT_CONFIG, self._load_settings_file())
        self._apply_env_overrides()

    def _load_settings_file(self) -> Dict[str, Any]:
        if not self.settings_path.exists():
            logger.debug("No settings.json at %s. Using defaults.", self.settings_path)
            return {}
        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", self.settings_path, e)
            return {}
        if not isinstance(loaded, dict):
            logger.error("Ignoring %s: top level must be an object.", self.settings_path)
            return {}
        logger.info("Configuration has been (re)loaded from %s.", self.settings_path)
        return loaded

    def _apply_env_overrides(self):
        for env_name, key_path in ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw:
                self.set_nested(key_path, raw)

    @classmethod
    def drop_instance(cls):
        """Forgets the singleton so the next construction reloads everything."""
        cls._instance = None
