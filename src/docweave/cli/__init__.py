"""Command-line interface for docweave.

The default command reads a Pandoc JSON AST, runs a chain of filters over it
and writes the result, so ``docweave`` works both in a shell pipeline and as
a Pandoc ``--filter`` program.

Environment Variable Support
----------------------------
DOCWEAVE_CONFIG names a configuration file to use when ``--config`` is not
given. ``--no-config`` ignores it.

Examples
--------
Run filters in a pipeline::

    $ pandoc doc.md -t json | docweave filter -t include -t python-exec | pandoc -f json -o doc.html

Use as a Pandoc filter, with the chain taken from ``.docweave.toml``::

    $ pandoc doc.md --filter docweave -o doc.html

List the available filters::

    $ docweave list-filters --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys

from docweave.cli.builder import create_parser
from docweave.cli.commands import dispatch_command
from docweave.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = [
    "main",
    "create_parser",
]

FILTER_COMMAND = "filter"


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return its exit code."""
    argv = list(sys.argv[1:] if args is None else args)

    command_result = dispatch_command(argv)
    if command_result is not None:
        return command_result

    if argv and argv[0] == FILTER_COMMAND:
        argv = argv[1:]

    parser = create_parser()
    try:
        parsed_args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits on --help, --version or bad arguments
        return e.code if isinstance(e.code, int) else 0

    _setup_logging_level(parsed_args)

    # Lazy import keeps --help from loading the filters
    from docweave.cli.commands.filter import handle_filter_command

    return handle_filter_command(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
