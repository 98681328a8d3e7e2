"""Configuration management and command-line interface."""

from .manager import ConfigManager, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigValidationError',
]
