"""
Configuration Manager

Builds the application configuration from defaults, an explicitly named
configuration file and CLI arguments (highest priority).
"""

import json
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from pydantic import ValidationError

from create_obsidian_plugin.core.config.models import AppConfig
from create_obsidian_plugin.core.exceptions import ConfigurationError, ErrorCode


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages application configuration with layered loading and validation.

    Configuration sources in order of precedence:
    1. CLI arguments (highest priority)
    2. Configuration file, only when one is passed explicitly
    3. Default values (lowest priority)
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to a YAML or JSON configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Return the loaded configuration, loading defaults on first use."""
        if self._config is None:
            return self.load_config()
        return self._config

    def load_config(self, cli_args: Optional[Dict[str, Any]] = None) -> AppConfig:
        """
        Load and validate configuration from all sources.

        Args:
            cli_args: Dictionary of CLI arguments; None values are ignored

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_config_file()
        if file_config:
            config_data = self._deep_merge(config_data, file_config)

        if cli_args:
            cli_config = self._normalize_cli_args(cli_args)
            config_data = self._deep_merge(config_data, cli_config)

        try:
            self._config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                cause=e
            ) from e

        logger.debug("Loaded configuration: %s", self._config.model_dump())
        return self._config

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from the explicitly named file."""
        config_file = self.config_file
        if config_file is None:
            return None

        if not config_file.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                config_key="config_file",
                config_value=str(config_file)
            )

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_file}: {e}",
                cause=e
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {config_file} must contain a mapping",
                config_key="config_file",
                config_value=str(config_file)
            )

        logger.info("Loaded configuration file %s", config_file)
        return data

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize CLI arguments to configuration structure."""
        normalized: Dict[str, Any] = {}

        cli_mappings = {
            'verbose': 'verbose',
        }

        for cli_key, value in cli_args.items():
            if value is None or cli_key not in cli_mappings:
                continue
            normalized[cli_mappings[cli_key]] = value

        return normalized

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
