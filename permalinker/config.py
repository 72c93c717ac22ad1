"""
Configuration management for Permalinker.

This module handles loading and accessing configuration values from config.yaml.
Permalink options, the record store location and logging settings all live
there, so a deployment can change them without touching code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging

from .models import (
    DEFAULT_PARENT_FIELD,
    DEFAULT_PLACEHOLDER,
    DEFAULT_TITLE_FIELD,
    DEFAULT_URL_PREFIX,
    PathOptions,
)


class ConfigManager:
    """
    Manages configuration loading and access for Permalinker.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Using default configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "permalink": {
                "titleField": DEFAULT_TITLE_FIELD,
                "parentField": DEFAULT_PARENT_FIELD,
                "urlPrefix": DEFAULT_URL_PREFIX,
                "placeholder": DEFAULT_PLACEHOLDER,
                "permalink_field": "permalink"
            },
            "database": {
                "filename": "permalinker.db"
            },
            "paths": {
                "log_file": "permalinker.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "permalink.urlPrefix")
            default: Default value if key is not found

        Returns:
            The configuration value
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def database_filename(self) -> str:
        """Get record store filename."""
        return self.get("database.filename", "permalinker.db")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "permalinker.log")

    @property
    def permalink_field(self) -> str:
        """Get the record attribute permalinks are written to."""
        return self.get("permalink.permalink_field", "permalink")

    @property
    def permalink_options(self) -> PathOptions:
        """Get the configured permalink options."""
        return PathOptions.from_config(self)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
