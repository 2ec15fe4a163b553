#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/converter.py
"""Pandoc subprocess bridge.

docweave never parses markup itself. When a filter needs an AST for a piece
of text (the inclusion filter's ``parse`` mode), it hands the text to Pandoc on
stdin and reads the JSON AST back from stdout.

The call is synchronous and has no timeout: a hung Pandoc process hangs the
pipeline run.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any, Callable

from docweave.ast.serialization import json_to_ast
from docweave.constants import DEFAULT_INPUT_FORMAT, DEFAULT_PANDOC_EXECUTABLE
from docweave.exceptions import ConverterError, ParsingError

logger = logging.getLogger(__name__)

# Anything that turns markup text into a list of Pandoc blocks
BlockConverter = Callable[[str], list[Any]]


class PandocConverter:
    """Convert markup text to Pandoc JSON by running ``pandoc``.

    Parameters
    ----------
    executable : str, default "pandoc"
        Pandoc binary name or path
    input_format : str, default "markdown"
        Value passed to ``pandoc -f``
    extra_args : list of str, optional
        Additional command-line arguments

    Examples
    --------
    >>> converter = PandocConverter()
    >>> blocks = converter("# Title")
    >>> blocks[0]["t"]
    'Header'

    """

    def __init__(
        self,
        executable: str = DEFAULT_PANDOC_EXECUTABLE,
        input_format: str = DEFAULT_INPUT_FORMAT,
        extra_args: list[str] | None = None,
    ):
        """Initialize the converter with the command to run."""
        self.executable = executable
        self.input_format = input_format
        self.extra_args = list(extra_args or [])

    def command(self) -> list[str]:
        """Return the command line used for conversion."""
        return [self.executable, "-f", self.input_format, "-t", "json", *self.extra_args]

    def parse(self, text: str) -> dict[str, Any]:
        """Convert ``text`` to a full Pandoc document.

        Raises
        ------
        ConverterError
            If Pandoc cannot be started, exits non-zero, or prints something
            that is not a Pandoc document

        """
        command = self.command()
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as e:
            raise ConverterError(f"Error running pandoc: {e}", command=command, original_error=e) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise ConverterError(f"Pandoc failed: {stderr}", command=command, stderr=stderr)

        try:
            return json_to_ast(result.stdout, source="pandoc output")
        except ParsingError as e:
            raise ConverterError(str(e), command=command, original_error=e) from e

    def parse_blocks(self, text: str) -> list[Any]:
        """Convert ``text`` and return only its top-level blocks."""
        return self.parse(text)["blocks"]

    def __call__(self, text: str) -> list[Any]:
        """Convert ``text`` to a list of blocks."""
        return self.parse_blocks(text)
