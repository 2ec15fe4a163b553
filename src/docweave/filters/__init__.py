#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/__init__.py
"""Pandoc AST filters.

This package holds the filter contract (predicate + transform, the
``safe_filter`` failure boundary and ``compose_filters``), the built-in
filters, and the registry that resolves filters by name.

Examples
--------
Compose built-in filters directly:

    >>> from docweave.filters import IncludeFilter, PythonExecFilter, compose_filters, safe_filter
    >>> pipeline = compose_filters(safe_filter(IncludeFilter(max_depth=3)), safe_filter(PythonExecFilter()))
    >>> new_ast = pipeline(ast)

Look a filter up by name:

    >>> from docweave.filters import filter_registry
    >>> sql = filter_registry.get_filter("sqlite", db="data.db")

"""

from docweave.filters.base import (
    CodeBlockFilter,
    FilterFunction,
    FunctionFilter,
    PandocFilter,
    compose_filters,
    filter_name,
    safe_filter,
)
from docweave.filters.include import IncludeContext, IncludeFilter
from docweave.filters.metadata import FilterMetadata
from docweave.filters.plantuml import PlantUmlFilter
from docweave.filters.python_exec import PythonExecFilter
from docweave.filters.registry import FilterRegistry, filter_registry
from docweave.filters.sqlite_exec import SqliteExecFilter

__all__ = [
    # Contract
    "PandocFilter",
    "CodeBlockFilter",
    "FunctionFilter",
    "FilterFunction",
    "filter_name",
    "safe_filter",
    "compose_filters",
    # Built-in filters
    "IncludeFilter",
    "IncludeContext",
    "PythonExecFilter",
    "SqliteExecFilter",
    "PlantUmlFilter",
    # Registry
    "FilterMetadata",
    "FilterRegistry",
    "filter_registry",
]
