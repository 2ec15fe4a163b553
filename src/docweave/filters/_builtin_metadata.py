#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/_builtin_metadata.py
"""Metadata definitions for built-in filters.

The registry registers these on first access.

"""

from __future__ import annotations

from docweave.filters.include import IncludeFilter
from docweave.filters.metadata import FilterMetadata
from docweave.filters.plantuml import PlantUmlFilter
from docweave.filters.python_exec import PythonExecFilter
from docweave.filters.sqlite_exec import SqliteExecFilter

INCLUDE_METADATA = FilterMetadata(
    name="include",
    description="Splice external files into the document (parse, code or raw mode)",
    filter_class=IncludeFilter,
    options={
        "base_dir": "Directory relative includes resolve against (default: source directory or cwd)",
        "max_depth": "Maximum include nesting that is expanded (default: 10)",
        "source": "Path of the document being filtered; seeds cycle detection",
        "converter": "Callable turning markup text into Pandoc blocks",
        "pandoc": "Pandoc executable for parse mode (default: pandoc)",
    },
    tags=["composition"],
)

PYTHON_EXEC_METADATA = FilterMetadata(
    name="python-exec",
    description="Execute python-exec code blocks and show their output",
    filter_class=PythonExecFilter,
    aliases=["py-exec"],
    tags=["execution"],
)

SQLITE_EXEC_METADATA = FilterMetadata(
    name="sqlite-exec",
    description="Run sqlite-exec code blocks as SQL and show the results",
    filter_class=SqliteExecFilter,
    options={"db": "Database for blocks without a db attribute (default: in-memory)"},
    aliases=["sqlite"],
    tags=["execution", "query"],
)

PLANTUML_METADATA = FilterMetadata(
    name="plantuml",
    description="Render plantuml code blocks to images with the plantuml tool",
    filter_class=PlantUmlFilter,
    options={
        "executable": "PlantUML binary (default: plantuml)",
        "default_format": "Output format for blocks without a format attribute (default: svg)",
    },
    aliases=["uml"],
    tags=["diagram"],
)

BUILTIN_FILTERS: list[FilterMetadata] = [
    INCLUDE_METADATA,
    PYTHON_EXEC_METADATA,
    SQLITE_EXEC_METADATA,
    PLANTUML_METADATA,
]
