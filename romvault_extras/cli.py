"""Command-line interface for romvault-extras."""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

from romvault_extras import __version__
from romvault_extras.archive.validator import check_input_file
from romvault_extras.config.loader import load_config, get_config_value, ConfigError
from romvault_extras.config.validator import validate_config, ValidationError
from romvault_extras.config.conversion import ConversionConfig
from romvault_extras.dat.assembler import DatAssembler
from romvault_extras.errors import ExtrasError


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romvault-extras',
        description='Convert a MAME EXTRAs Zip file to a dat file compatible with RomVault',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write "MAME 0.264 EXTRAs.dat" in the current directory
  romvault-extras "MAME 0.264 EXTRAs.zip"

  # Choose the output file
  romvault-extras "MAME 0.264 EXTRAs.zip" extras.dat

  # Use custom config file
  romvault-extras --config /path/to/config.yaml "MAME 0.264 EXTRAs.zip"
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        'inputfile',
        type=Path,
        help='MAME EXTRAs Zip file (e.g. "MAME 0.264 EXTRAs.zip")'
    )

    parser.add_argument(
        'outputfile',
        type=Path,
        nargs='?',
        help='Output dat file (default: input file name with a .dat extension). Must not exist.'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to config.yaml (default: built-in settings)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level. Overrides config.'
    )

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    # Get log level
    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = logging_config.get('file')
    if log_file:
        log_path = Path(log_file)
        # Create parent directory if it doesn't exist
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def run(config: ConversionConfig) -> Path:
    """
    Validate the input archive and generate the output dat.

    Args:
        config: Conversion run configuration

    Returns:
        Path of the generated dat

    Raises:
        ExtrasError: If validation, conversion or writing fails
    """
    check_input_file(config.input_file_path)
    return DatAssembler(config).generate()


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romvault-extras CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help and --version exit cleanly, argument errors map to 1
        return 0 if e.code in (0, None) else 1

    # Load and validate configuration
    try:
        config = load_config(args.config)
        # A non-mapping logging section is reported by validate_config
        if args.log_level and isinstance(config.get('logging'), dict):
            config['logging']['level'] = args.log_level
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        _setup_logging(config)
    except OSError as e:
        print(f"Error: Could not create log file: {e}", file=sys.stderr)
        return 1

    conversion_config = ConversionConfig.build(
        args.inputfile,
        args.outputfile,
        default_version=get_config_value(config, 'conversion.default_version'),
        parallel=get_config_value(config, 'conversion.parallel', True),
    )

    try:
        run(conversion_config)
    except ExtrasError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nConversion interrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
