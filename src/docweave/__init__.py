"""docweave - composable filters for Pandoc JSON documents.

docweave rewrites the JSON AST that Pandoc emits with ``-t json``. Each
filter is a pure function from AST to AST built from a predicate and a
transform; filters compose left to right and can be isolated so that one
failing filter leaves the document unchanged instead of breaking the run.

Key Features
------------
- Generic postorder tree walker over Pandoc JSON
- ``safe_filter`` and ``compose_filters`` combinators
- File inclusion with nested includes, cycle detection and a depth limit
- Executable code blocks for Python and SQLite, PlantUML diagrams
- Filter registry with entry point plugins
- ``docweave`` command for pipelines and ``pandoc --filter``

Requirements
------------
- Python 3.10+
- Pandoc on PATH for parsing included files in ``parse`` mode

Examples
--------
Expand includes in a document read from a file:

    >>> from docweave import IncludeFilter, read_ast, write_ast
    >>> ast = read_ast("doc.json")
    >>> write_ast(IncludeFilter(source="doc.md")(ast), "out.json")

Build a chain from registered names:

    >>> from docweave import apply_filters
    >>> new_ast = apply_filters(ast, ["include", "python-exec"], {"include": {"max_depth": 3}})

See Also
--------
docweave.filters : Filter contract, built-in filters and registry
docweave.ast : Node helpers, walker and JSON I/O

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "docweave requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from docweave.api import apply_filters, build_pipeline, run_filter
from docweave.ast import read_ast, walk, write_ast
from docweave.exceptions import (
    ConverterError,
    DocweaveError,
    FileError,
    FilterError,
    ParsingError,
    ValidationError,
)
from docweave.filters import (
    CodeBlockFilter,
    FunctionFilter,
    IncludeFilter,
    PandocFilter,
    PlantUmlFilter,
    PythonExecFilter,
    SqliteExecFilter,
    compose_filters,
    filter_registry,
    safe_filter,
)

__all__ = [
    "__version__",
    # API
    "apply_filters",
    "build_pipeline",
    "run_filter",
    "read_ast",
    "write_ast",
    "walk",
    # Filters
    "PandocFilter",
    "CodeBlockFilter",
    "FunctionFilter",
    "IncludeFilter",
    "PythonExecFilter",
    "SqliteExecFilter",
    "PlantUmlFilter",
    "safe_filter",
    "compose_filters",
    "filter_registry",
    # Exceptions
    "DocweaveError",
    "ValidationError",
    "FilterError",
    "FileError",
    "ParsingError",
    "ConverterError",
]
