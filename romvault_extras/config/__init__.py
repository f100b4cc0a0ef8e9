"""Configuration package for romvault-extras."""

from .loader import ConfigError, DEFAULT_CONFIG, load_config, get_config_value
from .validator import ValidationError, validate_config
from .conversion import ConversionConfig

__all__ = [
    'ConfigError',
    'DEFAULT_CONFIG',
    'load_config',
    'get_config_value',
    'ValidationError',
    'validate_config',
    'ConversionConfig',
]
