#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docweave/cli/commands/__init__.py
"""CLI command handlers for docweave."""

import logging

# Command handlers are imported lazily so --help does not load the filters

logger = logging.getLogger(__name__)

LIST_FILTERS_COMMANDS = ("list-filters", "filters")


def dispatch_command(args: list[str]) -> int | None:
    """Handle subcommands other than ``filter``.

    Parameters
    ----------
    args : list[str]
        Command line arguments

    Returns
    -------
    int or None
        Exit code if a command was handled, None otherwise

    """
    if not args:
        return None

    if args[0] in LIST_FILTERS_COMMANDS:
        from docweave.cli.commands.list_filters import handle_list_filters_command

        return handle_list_filters_command(args[1:])

    return None
