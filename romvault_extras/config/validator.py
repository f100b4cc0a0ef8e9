"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    # Validate logging section
    errors.extend(_validate_logging(config.get('logging', {})))

    # Validate conversion section
    errors.extend(_validate_conversion(config.get('conversion', {})))

    unknown = sorted(set(config) - {'logging', 'conversion'})
    for section in unknown:
        logger.warning(f"Ignoring unknown configuration section: {section}")

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []
    if not isinstance(section, dict):
        return ["logging must be a mapping"]

    # Validate level
    level = section.get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    if level not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    # Validate console flag
    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    # Validate optional log file
    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors


def _validate_conversion(section: Dict[str, Any]) -> List[str]:
    """Validate conversion options section."""
    errors = []
    if not isinstance(section, dict):
        return ["conversion must be a mapping"]

    parallel = section.get('parallel', True)
    if not isinstance(parallel, bool):
        errors.append("conversion.parallel must be a boolean")

    # bool is an int subclass
    version = section.get('default_version', 0.01)
    if isinstance(version, bool) or not isinstance(version, (int, float)):
        errors.append("conversion.default_version must be a number")
    elif version <= 0:
        errors.append("conversion.default_version must be positive")

    return errors
