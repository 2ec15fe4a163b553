#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/ast/serialization.py
"""Reading and writing Pandoc JSON documents.

Documents are kept as the plain JSON values Pandoc produced. Dict key order is
preserved on the way through, and output is written compactly the same way
Pandoc writes it, so parts of a document no filter touched come back out
exactly as they went in.

Examples
--------
Round trip a document through a filter:

    >>> from docweave.ast.serialization import read_ast, write_ast
    >>> ast = read_ast("input.json")      # or "-" for stdin
    >>> write_ast(my_filter(ast), "-")     # stdout

"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import IO, Any, Optional, Union

from docweave.constants import PANDOC_API_VERSION
from docweave.exceptions import InputError, OutputWriteError, ParsingError

logger = logging.getLogger(__name__)

AstSource = Union[str, Path, IO[str]]

STDIO_MARKER = "-"


def ast_to_json(ast: Any, indent: int | None = None) -> str:
    """Serialize an AST to a JSON string.

    Parameters
    ----------
    ast : Any
        Document or fragment
    indent : int or None, default None
        Indentation for pretty output. None writes compact JSON like Pandoc.

    Returns
    -------
    str
        JSON text

    """
    separators = (",", ":") if indent is None else None
    # ensure_ascii=False keeps non-ASCII text as Pandoc wrote it
    return json.dumps(ast, indent=indent, separators=separators, ensure_ascii=False)


def json_to_ast(json_str: str, source: Optional[str] = None) -> dict[str, Any]:
    """Parse JSON text into a Pandoc document.

    Parameters
    ----------
    json_str : str
        JSON text produced by ``pandoc -t json``
    source : str, optional
        Description of where the text came from, for error messages

    Returns
    -------
    dict
        The document

    Raises
    ------
    ParsingError
        If the text is not JSON or not a Pandoc document

    """
    where = source or "input"
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON in {where}: {e}", source=source, original_error=e) from e

    if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
        raise ParsingError(
            f"{where} is not a Pandoc JSON document (expected an object with a 'blocks' list)", source=source
        )

    if "pandoc-api-version" not in data:
        logger.warning("%s has no pandoc-api-version; continuing anyway", where)

    return data


def new_document(blocks: list[Any], meta: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Create a document with the current Pandoc API version."""
    return {"pandoc-api-version": list(PANDOC_API_VERSION), "meta": dict(meta or {}), "blocks": list(blocks)}


def read_ast(source: AstSource = STDIO_MARKER) -> dict[str, Any]:
    """Read a Pandoc JSON document.

    Parameters
    ----------
    source : str, Path or text stream, default "-"
        File path, ``"-"`` for stdin, or an open text stream (not closed)

    Returns
    -------
    dict
        The document

    Raises
    ------
    InputError
        If the source cannot be read
    ParsingError
        If the content is not a Pandoc JSON document

    """
    if isinstance(source, (str, Path)) and str(source) == STDIO_MARKER:
        return json_to_ast(sys.stdin.read(), source="<stdin>")

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise InputError(f"Input file not found: {path}", file_path=str(path), original_error=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read input file {path}: {e}", file_path=str(path), original_error=e) from e
        return json_to_ast(text, source=str(path))

    return json_to_ast(source.read(), source=getattr(source, "name", None))


def write_ast(ast: Any, destination: AstSource = STDIO_MARKER, indent: int | None = None) -> None:
    """Write a Pandoc JSON document.

    Parameters
    ----------
    ast : Any
        Document to write
    destination : str, Path or text stream, default "-"
        File path, ``"-"`` for stdout, or an open text stream (not closed)
    indent : int or None, default None
        Indentation for pretty output

    Raises
    ------
    OutputWriteError
        If a file destination cannot be written

    """
    text = ast_to_json(ast, indent=indent)

    if isinstance(destination, (str, Path)) and str(destination) == STDIO_MARKER:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    if isinstance(destination, (str, Path)):
        path = Path(destination)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"Cannot write output file {path}: {e}", file_path=str(path), original_error=e) from e
        return

    destination.write(text)
