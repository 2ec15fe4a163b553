#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Centralized logging utilities for docweave entry points.

Filters run inside a pipeline whose stdout usually carries the JSON AST on
its way back to Pandoc, so every diagnostic goes to stderr (or a log file).
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

logger = logging.getLogger(__name__)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("docweave: %(levelname)s: %(message)s")

    # Never stdout: it carries the filtered AST
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    return root_logger


def debug_ast(ast: Any, label: str = "AST structure") -> Any:
    """Log an indented dump of an AST at DEBUG level and return it unchanged.

    Useful as a pass-through stage inside a filter chain.

    Parameters
    ----------
    ast : Any
        Pandoc AST (or any fragment of one)
    label : str, default "AST structure"
        Heading printed before the dump

    Returns
    -------
    Any
        The same object that was passed in

    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s:\n%s", label, json.dumps(ast, indent=2, ensure_ascii=False, default=repr))
    return ast
