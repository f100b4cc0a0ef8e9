"""
Input archive package for romvault-extras.

Knows the entry names of a MAME EXTRAs archive, validates archives before
conversion and derives the MAME version from the archive name.
"""

from .entries import ALL_NON_ZIPPED_CONTENT, ARTWORK, SAMPLES, FILES
from .validator import check_input_file
from .version import DEFAULT_VERSION, extract_version, format_version

__all__ = [
    'ALL_NON_ZIPPED_CONTENT',
    'ARTWORK',
    'SAMPLES',
    'FILES',
    'check_input_file',
    'DEFAULT_VERSION',
    'extract_version',
    'format_version',
]
