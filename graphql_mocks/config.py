"""
Configuration Management Module

Handles loading, validation, and merging of mocking configuration files.
Constant mocks declared in configuration become override functions.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Callable, List, Optional, Union
from dataclasses import dataclass, field, asdict
from copy import deepcopy
import logging

from .generators.mock_list import MockList

logger = logging.getLogger(__name__)

LIST_KEY = "__list__"


@dataclass
class MockingConfig:
    """Configuration for mock installation"""
    preserve_resolvers: bool = False
    extended_scalars: bool = False  # Faker-backed DateTime, Email, URL...
    locale: str = "en_US"


@dataclass
class ServerConfig:
    """Configuration for the HTTP API"""
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])


@dataclass
class LoggingConfig:
    """Configuration for logging"""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class combining all sub-configurations"""
    mocking: MockingConfig = field(default_factory=MockingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Constant mocks keyed by type name
    mocks: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def merge(self, other: 'Config') -> 'Config':
        """Merge another configuration into this one (other takes precedence)"""
        merged = deepcopy(self)

        for key in ['mocking', 'server', 'logging']:
            other_config = getattr(other, key)
            merged_config = getattr(merged, key)

            # Update non-None values
            for field_name, field_value in asdict(other_config).items():
                if field_value is not None:
                    setattr(merged_config, field_name, field_value)

        merged.mocks.update(other.mocks)

        return merged


def _list_length(marker: Dict[str, Any]) -> Any:
    length = marker[LIST_KEY]
    return tuple(length) if isinstance(length, list) else length


def _materialize(value: Any) -> Any:
    if isinstance(value, dict):
        if LIST_KEY in value:
            return MockList(_list_length(value))
        return {key: _materialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_materialize(item) for item in value]
    return value


def _constant_mock(value: Any) -> Callable:
    def mock(parent, info, **args):
        return _materialize(value)

    return mock


def build_mocks(config: Config) -> Dict[str, Callable]:
    """
    Turn the constant mocks of a configuration into override functions

    Nested values of the form {"__list__": 3} or {"__list__": [1, 5]} become
    MockList instances, so a field can ask for a list length:

        User:
          name: Alice
          friends: {__list__: [1, 5]}

    Everything else is returned as is (copied per call).

    Args:
        config: Configuration holding the constant mocks

    Returns:
        Mapping of type name to override function
    """
    return {type_name: _constant_mock(value) for type_name, value in config.mocks.items()}


class ConfigLoader:
    """Loads and saves configuration from various sources"""

    def load_from_file(self, filepath: Union[str, Path]) -> Config:
        """
        Load configuration from a YAML file

        Args:
            filepath: Path to the YAML configuration file

        Returns:
            Config object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        logger.info(f"Loaded configuration: {filepath}")
        return self._dict_to_config(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> Config:
        """
        Load configuration from a dictionary

        Args:
            config_dict: Configuration dictionary

        Returns:
            Config object
        """
        return self._dict_to_config(config_dict)

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> Config:
        """Convert dictionary to Config object"""
        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_dict).__name__}")

        config = Config()

        config_mapping = {
            'mocking': MockingConfig,
            'server': ServerConfig,
            'logging': LoggingConfig,
        }

        for key, config_class in config_mapping.items():
            if key in config_dict:
                try:
                    setattr(config, key, config_class(**(config_dict[key] or {})))
                except TypeError as e:
                    raise ValueError(f"Invalid '{key}' section: {e}") from e

        if 'mocks' in config_dict:
            config.mocks = dict(config_dict['mocks'] or {})

        return config

    def merge_configs(self, base: Config, override: Union[Config, Dict[str, Any], str, Path]) -> Config:
        """
        Merge configurations with override taking precedence

        Args:
            base: Base configuration
            override: Override configuration (Config object, dict, or file path)

        Returns:
            Merged Config object
        """
        if isinstance(override, (str, Path)):
            override = self.load_from_file(override)
        elif isinstance(override, dict):
            override = self.load_from_dict(override)

        return base.merge(override)

    def save_config(self, config: Config, filepath: Union[str, Path]):
        """
        Save configuration to a YAML file

        Args:
            config: Configuration to save
            filepath: Path to save the file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to: {filepath}")


class ConfigValidator:
    """Validates configuration parameters"""

    VALID_LOCALES = ["en_US", "en_GB", "fr_FR", "de_DE", "es_ES", "ja_JP", "zh_CN"]
    VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    @staticmethod
    def validate(config: Config) -> tuple[bool, List[str]]:
        """
        Validate configuration parameters

        Args:
            config: Configuration to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if config.mocking.locale not in ConfigValidator.VALID_LOCALES:
            errors.append(f"mocking.locale must be one of {ConfigValidator.VALID_LOCALES}")

        if not 1 <= config.server.port <= 65535:
            errors.append("server.port must be between 1 and 65535")

        if str(config.logging.level).upper() not in ConfigValidator.VALID_LEVELS:
            errors.append(f"logging.level must be one of {ConfigValidator.VALID_LEVELS}")

        for type_name, value in config.mocks.items():
            if not isinstance(type_name, str) or not type_name:
                errors.append(f"mocks keys must be non-empty type names, got {type_name!r}")
                continue

            try:
                _materialize(value)
            except (ValueError, TypeError) as e:
                errors.append(f"mocks.{type_name}: {e}")

        return len(errors) == 0, errors


def get_default_config() -> Config:
    """Get the default configuration"""
    return Config()
