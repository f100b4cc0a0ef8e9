"""
Input archive validation.

Checks that the EXTRAs archive exists, can be read, is a valid Zip file and
contains the three dat entries before any conversion work starts.
"""

import logging
import zipfile
from pathlib import Path
from typing import List

from romvault_extras.errors import InputFileError
from .entries import FILES

logger = logging.getLogger(__name__)


def check_input_file(input_file_path: Path) -> None:
    """
    Validate the input EXTRAs archive.

    Args:
        input_file_path: Path to the Zip archive

    Raises:
        InputFileError: If the file does not exist, cannot be accessed, is
            not a valid Zip file, or lacks one of the expected entries
    """
    input_file_path = Path(input_file_path)

    try:
        input_file_path.stat()
    except FileNotFoundError:
        raise InputFileError(f"the file `{input_file_path}` does not exist")
    except PermissionError:
        raise InputFileError(f"you have no permission to access file `{input_file_path}`")
    except OSError:
        raise InputFileError(f"the file `{input_file_path}` cannot be loaded")

    try:
        with zipfile.ZipFile(input_file_path, "r") as archive:
            entries = archive.namelist()
    except zipfile.BadZipFile:
        raise InputFileError(f"the file `{input_file_path}` is not a valid Zip file")
    except PermissionError:
        raise InputFileError(f"you have no permission to access file `{input_file_path}`")
    except OSError:
        raise InputFileError(f"the file `{input_file_path}` cannot be loaded")

    missing = missing_entries(entries)
    if missing:
        raise InputFileError(
            f"input Zip file must contain 3 files: {', '.join(FILES)} "
            f"(missing: {', '.join(missing)})"
        )

    logger.debug(f"Input archive {input_file_path} contains {len(entries)} entries")


def missing_entries(entries: List[str]) -> List[str]:
    """Return the expected dat entries absent from an archive listing."""
    return [name for name in FILES if name not in entries]
