#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser and exit codes for the docweave CLI."""

from __future__ import annotations

import argparse
import logging

from docweave.exceptions import FileError, ParsingError, ValidationError

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    # FilterError is a ValidationError
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    return EXIT_ERROR


def non_negative_int(value: str) -> int:
    """Argparse type for counts that may be zero."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected an integer, got '{value}'") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"Value must be non-negative, got {number}")
    return number


def get_version() -> str:
    from docweave import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for the ``filter`` command (the default command)."""
    parser = argparse.ArgumentParser(
        prog="docweave",
        usage="docweave [filter] [-h] [-t NAME] [-i INPUT] [-o OUTPUT] [OPTIONS] [target_format]",
        description="Apply filters to a Pandoc JSON AST",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Expand includes, then run python blocks
  pandoc doc.md -t json | docweave filter -t include -t python-exec | pandoc -f json -o doc.html

  # Use as a pandoc filter (filters come from .docweave.toml)
  pandoc doc.md --filter docweave -o doc.html

  # Read and write files instead of stdin/stdout
  docweave filter -t include -i doc.json -o out.json --max-depth 3

Other commands:
  docweave list-filters [NAME] [--rich]   Show available filters
""",
    )

    parser.add_argument(
        "target_format",
        nargs="?",
        help="Output format passed by pandoc when run with --filter (informational only)",
    )

    filter_group = parser.add_argument_group("Filter selection")
    filter_group.add_argument(
        "-t",
        "--filter",
        action="append",
        dest="filters",
        metavar="NAME",
        help="Filter to apply (repeatable, applied in the order given). "
        "Defaults to the 'filters' list from the configuration file.",
    )
    filter_group.add_argument(
        "--no-safe",
        action="store_true",
        dest="no_safe",
        help="Let a failing filter abort the run instead of logging the error and leaving the document unchanged",
    )

    io_group = parser.add_argument_group("Input and output")
    io_group.add_argument("-i", "--input", default="-", metavar="PATH", help="Input AST file (default: stdin)")
    io_group.add_argument("-o", "--output", default="-", metavar="PATH", help="Output AST file (default: stdout)")
    io_group.add_argument("--pretty", action="store_true", help="Indent the output JSON")

    include_group = parser.add_argument_group("Include options")
    include_group.add_argument(
        "--max-depth",
        type=non_negative_int,
        metavar="N",
        help="Maximum include nesting that is expanded (default: 10)",
    )
    include_group.add_argument(
        "--base-dir", metavar="DIR", help="Directory top-level relative includes resolve against"
    )
    include_group.add_argument(
        "--source",
        metavar="FILE",
        help="Path of the document being filtered; used for relative includes and self-include detection",
    )
    include_group.add_argument("--pandoc", metavar="EXE", help="Pandoc executable used to parse included files")

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--config",
        help="Path to configuration file (TOML, YAML or JSON). "
        "If not specified, searches for .docweave.toml/.yaml/.yml/.json or [tool.docweave] in pyproject.toml "
        "from the current directory upwards, then in the home directory.",
    )
    config_group.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Disable loading of configuration files. Ignores auto-discovered configs, "
        "the DOCWEAVE_CONFIG environment variable, and any --config flag.",
    )

    log_group = parser.add_argument_group("Logging")
    log_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    log_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING). Overrides --verbose if both are specified.",
    )
    log_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to stderr",
    )
    log_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names",
    )

    parser.add_argument("--version", "-V", action="version", version=f"docweave {get_version()}")

    return parser
