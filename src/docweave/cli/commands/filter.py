#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docweave/cli/commands/filter.py
"""The ``filter`` command: read an AST, run a filter chain, write the AST."""

import argparse
import logging
import os
import sys
from typing import Any, Dict

from docweave.api import build_pipeline
from docweave.ast.serialization import read_ast, write_ast
from docweave.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR, get_exit_code_for_exception
from docweave.cli.config import (
    CONFIG_ENV_VAR,
    get_default_filters,
    get_filter_options,
    load_config_with_priority,
    merge_configs,
)
from docweave.exceptions import DocweaveError

logger = logging.getLogger(__name__)


def _include_overrides(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Collect include options given on the command line."""
    overrides: Dict[str, Any] = {}
    if parsed_args.max_depth is not None:
        overrides["max_depth"] = parsed_args.max_depth
    if parsed_args.base_dir:
        overrides["base_dir"] = parsed_args.base_dir
    if parsed_args.source:
        overrides["source"] = parsed_args.source
    if parsed_args.pandoc:
        overrides["pandoc"] = parsed_args.pandoc
    return overrides


def handle_filter_command(parsed_args: argparse.Namespace) -> int:
    """Run the filter chain described by ``parsed_args``.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Arguments from ``create_parser``

    Returns
    -------
    int
        Exit code

    """
    try:
        if parsed_args.no_config:
            config: Dict[str, Any] = {}
        else:
            config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        names = parsed_args.filters or get_default_filters(config)
        options = get_filter_options(config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if not names:
        print("Error: No filters given. Use -t NAME or set 'filters' in a configuration file.", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    include_overrides = _include_overrides(parsed_args)
    if include_overrides:
        options = merge_configs(options, {"include": include_overrides})

    if parsed_args.target_format:
        logger.debug(f"Target format: {parsed_args.target_format}")
    logger.info(f"Applying filters: {', '.join(names)}")

    try:
        pipeline = build_pipeline(names, options, safe=not parsed_args.no_safe)
        ast = read_ast(parsed_args.input)
        result = pipeline(ast)
        write_ast(result, parsed_args.output, indent=2 if parsed_args.pretty else None)
    except DocweaveError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        # Only reachable with --no-safe
        logger.debug("Filter traceback", exc_info=True)
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
