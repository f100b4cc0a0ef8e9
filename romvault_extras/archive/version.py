"""MAME version detection from EXTRAs archive file names."""

import re
from decimal import Decimal
from typing import Optional

# Placeholder used when the archive name carries no version
DEFAULT_VERSION = 0.01

VERSION_PATTERN = re.compile(r"MAME (?P<version>\d\.\d+) EXTRAs\.zip$", re.IGNORECASE)


def extract_version(file_name: str) -> Optional[float]:
    """
    Extract the MAME version from an EXTRAs archive file name.

    Args:
        file_name: File name or path (e.g. "dats/MAME 0.264 EXTRAs.zip")

    Returns:
        Version as a float, or None if the name does not match

    Example:
        >>> extract_version("dats/MAME 0.262 Extras.zip")
        0.262
        >>> extract_version("dats/Extras.zip") is None
        True
    """
    match = VERSION_PATTERN.search(str(file_name))
    if not match:
        return None

    try:
        return float(match.group("version"))
    except ValueError:
        return None


def format_version(version: float) -> str:
    """Render a version as a plain decimal (0.264, 0.27, 1, 0.00001)."""
    return format(Decimal(repr(version)).normalize(), "f")
