"""Configuration loading and parsing."""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from romvault_extras.archive.version import DEFAULT_VERSION

DEFAULT_CONFIG: Dict[str, Any] = {
    'logging': {
        'level': 'INFO',
        'console': True,
        'file': None,
    },
    'conversion': {
        'parallel': True,
        'default_version': DEFAULT_VERSION,
    },
}


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.

    Args:
        config_path: Path to a YAML config file. If None, built-in defaults
            are returned.

    Returns:
        Configuration dictionary (file values merged over defaults)

    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    # Load YAML
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")

    # Empty file means defaults
    if user_config is None:
        return config

    if not isinstance(user_config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    return merge_dicts(config, user_config)


def merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base and return base."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'conversion.parallel')
        default: Default value if path not found

    Returns:
        Configuration value or default

    Example:
        >>> get_config_value(config, 'logging.level')
        'INFO'
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
