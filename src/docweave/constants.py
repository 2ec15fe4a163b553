#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for docweave.

This module centralizes the Pandoc wire keys, reserved class labels,
attribute names and defaults used across the filters.

Constants are organized by category:
1. Type Definitions
2. Pandoc AST Wire Format
3. Inclusion
4. Code Execution
5. Query Execution
6. Diagram Rendering
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

IncludeMode = Literal["parse", "code", "raw"]
SqliteOutputFormat = Literal["table", "text"]

# =============================================================================
# Pandoc AST Wire Format
# =============================================================================

# Key holding the node type tag
TYPE_KEY = "t"

# Key holding the node payload
CONTENT_KEY = "c"

# API version written into documents created from scratch
PANDOC_API_VERSION = [1, 23, 1]

DEFAULT_PANDOC_EXECUTABLE = "pandoc"
DEFAULT_INPUT_FORMAT = "markdown"

# =============================================================================
# Inclusion
# =============================================================================

INCLUDE_CLASS = "include"
INCLUDE_ERROR_CLASS = "include-error"
INCLUDED_CLASS = "included"

INCLUDE_BASE_ATTR = "base"
INCLUDE_MODE_ATTR = "mode"
INCLUDE_LANG_ATTR = "lang"
INCLUDE_FORMAT_ATTR = "format"
INCLUDE_SOURCE_ATTR = "source"

INCLUDE_MODES: tuple[str, ...] = ("parse", "code", "raw")
DEFAULT_INCLUDE_MODE: IncludeMode = "parse"
DEFAULT_RAW_FORMAT = "markdown"

# Soft bound on nested includes; deeper include nodes are left untouched
DEFAULT_MAX_INCLUDE_DEPTH = 10

# =============================================================================
# Code Execution
# =============================================================================

PYTHON_EXEC_CLASSES: tuple[str, ...] = ("python-exec", "py-exec")

# =============================================================================
# Query Execution
# =============================================================================

SQLITE_EXEC_CLASSES: tuple[str, ...] = ("sqlite-exec", "sqlite")
SQLITE_DB_ATTR = "db"
SQLITE_FORMAT_ATTR = "format"
SQLITE_MEMORY_DB = ":memory:"
DEFAULT_SQLITE_FORMAT: SqliteOutputFormat = "table"

# =============================================================================
# Diagram Rendering
# =============================================================================

PLANTUML_CLASSES: tuple[str, ...] = ("plantuml", "uml")
PLANTUML_FORMAT_ATTR = "format"
DEFAULT_PLANTUML_EXECUTABLE = "plantuml"
DEFAULT_PLANTUML_FORMAT = "svg"

PLANTUML_FORMAT_FLAGS: dict[str, str] = {
    "svg": "-tsvg",
    "png": "-tpng",
    "txt": "-ttxt",
    "utxt": "-tutxt",
    "pdf": "-tpdf",
    "eps": "-teps",
    "latex": "-tlatex",
}

# Formats whose output is text rather than binary image data
PLANTUML_TEXT_FORMATS = frozenset({"txt", "utxt", "latex"})

PLANTUML_MIME_TYPES: dict[str, str] = {
    "svg": "image/svg+xml",
    "png": "image/png",
    "pdf": "application/pdf",
    "eps": "application/postscript",
}
