"""Configuration loading and management."""
import logging
import os
from dataclasses import fields
from typing import Any, Dict, Optional

import yaml

from ..core.errors import ConfigError
from .config import RunConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'default_config.yaml')

# Command line attribute name -> RunConfig field name
CLI_OVERRIDES = {
    'period': 'period',
    'network_interface': 'network_interface',
    'stat_path': 'stat_path',
    'log_file': 'log_file',
    'iterations': 'iterations',
    'log_level': 'log_level',
}


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load raw settings from a YAML file."""
        config_path = config_path or DEFAULT_CONFIG_PATH
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read config file '{config_path}': {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in config file '{config_path}': {e}") from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"config file '{config_path}' must contain a mapping")

        known = {f.name for f in fields(RunConfig)}
        unknown = sorted(set(config_data) - known)
        if unknown:
            raise ConfigError(
                f"unknown keys in config file '{config_path}': {', '.join(unknown)}")

        logger.debug("Loaded configuration from %s", config_path)
        return config_data

    @staticmethod
    def build_config(config_data: Dict[str, Any], overrides: Optional[Any] = None) -> RunConfig:
        """Merge command line overrides on top of file settings."""
        settings = dict(config_data)
        if overrides is not None:
            for attr, name in CLI_OVERRIDES.items():
                value = getattr(overrides, attr, None)
                if value is not None:
                    settings[name] = value

        if settings.get('stat_path') is not None:
            settings['stat_path'] = str(settings['stat_path'])
        if settings.get('proc_root') is not None:
            settings['proc_root'] = str(settings['proc_root'])

        try:
            return RunConfig(**settings)
        except TypeError as e:
            raise ConfigError(str(e)) from e
