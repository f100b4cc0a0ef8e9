"""Persistence of generated dat files."""

import logging
from pathlib import Path

from romvault_extras.errors import DestinationExistsError, WriteError

logger = logging.getLogger(__name__)


def write_datfile(data: bytes, output_path: Path) -> Path:
    """
    Write a generated dat to a new file.

    The file is created exclusively: an existing path is never overwritten.

    Args:
        data: Serialized dat document
        output_path: Destination path

    Returns:
        Path of the written file

    Raises:
        DestinationExistsError: If output_path already exists
        WriteError: If the file cannot be created or written
    """
    output_path = Path(output_path)

    try:
        with open(output_path, "xb") as f:
            f.write(data)
    except FileExistsError:
        raise DestinationExistsError(f"file {output_path} already exists")
    except OSError as e:
        raise WriteError(f"failed to write {output_path}: {e.strerror or e}") from e

    logger.info(f"Wrote {len(data)} bytes to {output_path}")
    return output_path
