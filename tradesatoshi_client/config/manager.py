"""Configuration loading and validation."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..api.errors import ConfigurationError
from ..api.request import DEFAULT_BASE_URL
from ..api.signer import Credentials
from ..api.transport import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = 'TRADESATOSHI_CONFIG'
DEFAULT_CONFIG_PATH = 'config/default.yaml'

API_DEFAULTS = {
    'base_url': DEFAULT_BASE_URL,
    'timeout': DEFAULT_TIMEOUT,
    'user_agent': DEFAULT_USER_AGENT,
    'log_requests': False,
}

LOGGING_DEFAULTS = {
    'level': 'INFO',
    'dir': 'logs',
    'console': True,
    'file': False,
    'structured': False,
}

# Keys that would put secrets in a file on disk
FORBIDDEN_API_FIELDS = ('api_key', 'api_secret', 'secret', 'key')


@dataclass(eq=False)
class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""
    message: str
    config_path: Optional[str] = None
    field_path: Optional[str] = None
    expected_type: Optional[str] = None
    actual_value: Optional[Any] = None

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


def _type_name(expected_type) -> str:
    if isinstance(expected_type, tuple):
        return ' or '.join(t.__name__ for t in expected_type)
    return expected_type.__name__


class ConfigManager:
    """Loads and validates the YAML client configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Path to the config file. Falls back to
                $TRADESATOSHI_CONFIG, then config/default.yaml.
        """
        self.config_path = config_path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._loaded = False

    def load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            config_path: Optional path to config file. Uses instance path if not provided.

        Returns:
            Dictionary containing loaded configuration

        Raises:
            ConfigValidationError: If config file is invalid or missing
        """
        path = config_path or self.config_path
        config_file = Path(path)
        if not config_file.exists():
            raise ConfigValidationError(
                f"Configuration file not found: {path}",
                config_path=path
            )

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML syntax in {path}: {str(e)}",
                config_path=path
            ) from e
        except OSError as e:
            raise ConfigValidationError(
                f"Failed to read configuration from {path}: {str(e)}",
                config_path=path
            ) from e

        if config_data is None:
            raise ConfigValidationError(
                f"Configuration file is empty: {path}",
                config_path=path
            )

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Configuration must be a dictionary, got {type(config_data).__name__}",
                config_path=path,
                expected_type="dict",
                actual_value=type(config_data).__name__
            )

        self._validate_config_structure(config_data, path)
        self._validate_api_config(config_data['api'], path)
        self._validate_logging_config(config_data.get('logging', {}), path)

        self._config = config_data
        self._loaded = True
        logger.debug(f"Successfully loaded configuration from {path}")
        return config_data.copy()

    def _validate_config_structure(self, config: Dict[str, Any], path: str) -> None:
        """Validate that config has required structure."""
        if 'api' not in config:
            raise ConfigValidationError(
                f"Missing required configuration section 'api' in {path}",
                config_path=path,
                field_path='api'
            )

        for section in ('api', 'logging'):
            if section in config and not isinstance(config[section], dict):
                raise ConfigValidationError(
                    f"Configuration section '{section}' must be a dictionary in {path}",
                    config_path=path,
                    field_path=section,
                    expected_type="dict",
                    actual_value=type(config[section]).__name__
                )

    def _check_types(self, section: str, values: Dict[str, Any],
                     field_types: Dict[str, Any], path: str) -> None:
        for field, expected_type in field_types.items():
            if field not in values:
                continue
            value = values[field]
            # bool is an int subclass; only accept it where bool is expected
            is_bool_mismatch = isinstance(value, bool) and expected_type is not bool
            if is_bool_mismatch or not isinstance(value, expected_type):
                raise ConfigValidationError(
                    f"{section.capitalize()} config field '{field}' must be of type "
                    f"{_type_name(expected_type)} in {path}",
                    config_path=path,
                    field_path=f"{section}.{field}",
                    expected_type=_type_name(expected_type),
                    actual_value=type(value).__name__
                )

    def _validate_api_config(self, api_config: Dict[str, Any], path: str) -> None:
        """Validate API configuration section."""
        for field in FORBIDDEN_API_FIELDS:
            if field in api_config:
                raise ConfigValidationError(
                    f"API config must not contain '{field}'; set credentials through "
                    f"the environment instead ({path})",
                    config_path=path,
                    field_path=f"api.{field}"
                )

        if 'base_url' not in api_config:
            raise ConfigValidationError(
                f"Missing required API config field 'base_url' in {path}",
                config_path=path,
                field_path="api.base_url"
            )

        self._check_types('api', api_config, {
            'base_url': str,
            'timeout': (int, float),
            'user_agent': str,
            'log_requests': bool,
        }, path)

        if not api_config['base_url'].startswith(('http://', 'https://')):
            raise ConfigValidationError(
                f"API config 'base_url' must be an http(s) URL in {path}",
                config_path=path,
                field_path="api.base_url",
                expected_type="http(s) URL",
                actual_value=api_config['base_url']
            )

        timeout = api_config.get('timeout', DEFAULT_TIMEOUT)
        if timeout <= 0:
            raise ConfigValidationError(
                f"API config 'timeout' must be positive in {path}",
                config_path=path,
                field_path="api.timeout",
                expected_type="positive number",
                actual_value=timeout
            )

    def _validate_logging_config(self, logging_config: Dict[str, Any], path: str) -> None:
        """Validate logging configuration section."""
        self._check_types('logging', logging_config, {
            'level': str,
            'dir': str,
            'console': bool,
            'file': bool,
            'structured': bool,
        }, path)

        level = logging_config.get('level')
        if level is not None and level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigValidationError(
                f"Logging config 'level' is not a valid log level in {path}",
                config_path=path,
                field_path="logging.level",
                expected_type="DEBUG, INFO, WARNING, ERROR or CRITICAL",
                actual_value=level
            )

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return self._config.copy()

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get specific configuration section."""
        config = self.get_config()
        if section not in config:
            raise ConfigValidationError(f"Configuration section '{section}' not found")
        return config[section].copy()

    def get_api_settings(self) -> Dict[str, Any]:
        """API section with defaults filled in."""
        settings = dict(API_DEFAULTS)
        settings.update(self.get_section('api'))
        return settings

    def get_logging_settings(self) -> Dict[str, Any]:
        """Logging section with defaults filled in."""
        settings = dict(LOGGING_DEFAULTS)
        settings.update(self.get_config().get('logging', {}))
        return settings

    def get_credentials(self) -> Optional[Credentials]:
        """Credentials from the environment, or None when not configured."""
        return Credentials.from_env()

    def validate_config_file(self, config_path: str) -> bool:
        """Validate a configuration file without loading it permanently.

        Args:
            config_path: Path to configuration file to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            ConfigManager(config_path).load_config()
            return True
        except ConfigValidationError:
            return False
