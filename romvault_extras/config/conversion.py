"""Run configuration for one archive conversion."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from romvault_extras.archive.version import DEFAULT_VERSION, extract_version


@dataclass
class ConversionConfig:
    """
    Parameters of a conversion run.

    Built from command-line input; the version is derived from the input
    archive name.
    """
    input_file_path: Path  # Zip file used for input
    output_file_path: Path  # Generated dat is written here
    version: float  # MAME version written in the header
    parallel: bool = True  # Convert the three dats concurrently

    @classmethod
    def build(
        cls,
        input_file_path: Union[str, Path],
        output_file_path: Optional[Union[str, Path]] = None,
        default_version: float = DEFAULT_VERSION,
        parallel: bool = True,
    ) -> "ConversionConfig":
        """
        Build configuration from input and optional output paths.

        Args:
            input_file_path: Path to the EXTRAs Zip archive
            output_file_path: Output dat path; defaults to the input file name
                with a .dat extension, in the current directory
            default_version: Version used when none is found in the name
            parallel: Convert the three dats concurrently

        Returns:
            ConversionConfig instance
        """
        input_file_path = Path(input_file_path)
        if output_file_path is None:
            output_file_path = Path(input_file_path.name).with_suffix(".dat")
        else:
            output_file_path = Path(output_file_path)

        version = extract_version(str(input_file_path))
        if version is None:
            version = default_version

        return cls(
            input_file_path=input_file_path,
            output_file_path=output_file_path,
            version=version,
            parallel=parallel,
        )
