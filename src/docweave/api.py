"""The major exported API functions for running filters."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/docweave/api.py
import logging
from typing import Any, Mapping, Optional, Sequence

from docweave.ast.serialization import STDIO_MARKER, AstSource, read_ast, write_ast
from docweave.filters.base import FilterFunction, compose_filters, filter_name, safe_filter
from docweave.filters.registry import filter_registry

logger = logging.getLogger(__name__)


def build_pipeline(
    names: Sequence[str],
    options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    safe: bool = True,
) -> FilterFunction:
    """Build a filter chain from registered filter names.

    Parameters
    ----------
    names : sequence of str
        Filter names or aliases, in application order
    options : mapping, optional
        Constructor options keyed by filter name. Canonical names and aliases
        are both accepted as keys.
    safe : bool, default True
        Wrap every filter in ``safe_filter``

    Returns
    -------
    callable
        The composed filter

    Raises
    ------
    FilterError
        If a name is unknown or a filter cannot be constructed

    """
    options = options or {}
    chain: list[FilterFunction] = []
    for name in names:
        canonical = filter_registry.resolve_name(name)
        kwargs = dict(options.get(canonical) or options.get(name) or {})
        filter_fn = filter_registry.get_filter(name, **kwargs)
        chain.append(safe_filter(filter_fn) if safe else filter_fn)

    logger.debug(f"Built filter pipeline: {', '.join(filter_name(f) for f in chain) or '(empty)'}")
    return compose_filters(*chain)


def apply_filters(
    ast: Any,
    names: Sequence[str],
    options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    safe: bool = True,
) -> Any:
    """Apply registered filters to an AST, left to right.

    Parameters
    ----------
    ast : Any
        Pandoc document
    names : sequence of str
        Filter names or aliases
    options : mapping, optional
        Constructor options keyed by filter name
    safe : bool, default True
        Isolate each filter's failure with ``safe_filter``

    Returns
    -------
    Any
        The filtered document

    Examples
    --------
    >>> new_ast = apply_filters(ast, ["include", "python-exec"], {"include": {"max_depth": 3}})

    """
    return build_pipeline(names, options, safe=safe)(ast)


def run_filter(
    filter_fn: FilterFunction,
    source: AstSource = STDIO_MARKER,
    destination: AstSource = STDIO_MARKER,
) -> Any:
    """Read a Pandoc JSON document, filter it and write the result.

    This is the body of a Pandoc JSON filter program:

        >>> if __name__ == "__main__":
        ...     run_filter(IncludeFilter())

    Parameters
    ----------
    filter_fn : callable
        Filter to apply
    source : str, Path or text stream, default "-"
        Where to read the document (stdin by default)
    destination : str, Path or text stream, default "-"
        Where to write the document (stdout by default)

    Returns
    -------
    Any
        The filtered document

    Raises
    ------
    InputError
        If the source cannot be read
    ParsingError
        If the source is not a Pandoc JSON document
    OutputWriteError
        If the destination cannot be written

    """
    ast = read_ast(source)
    result = filter_fn(ast)
    write_ast(result, destination)
    return result
