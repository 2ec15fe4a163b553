#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/base.py
"""The filter contract shared by every docweave filter.

A filter is any callable taking a Pandoc AST and returning a new one. Most
filters are built from two pieces:

- ``predicate(node)``: is this node mine to rewrite?
- ``transform(node)``: the rewrite itself

and the generic driver ``walk(lambda n: transform(n) if predicate(n) else n, ast)``.
``PandocFilter`` packages that driver; ``CodeBlockFilter`` specializes it for
the common case of rewriting code blocks marked with a class.

Two combinators make independently written filters safe to chain:

- ``safe_filter`` isolates one filter's failure: the error is logged and the
  AST it was given comes back unchanged.
- ``compose_filters`` threads an AST through several filters, left to right.

Examples
--------
    >>> from docweave.filters import IncludeFilter, PythonExecFilter, compose_filters, safe_filter
    >>> pipeline = compose_filters(safe_filter(IncludeFilter()), safe_filter(PythonExecFilter()))
    >>> new_ast = pipeline(ast)

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional

from docweave.ast.nodes import CodeBlock
from docweave.ast.walk import walk

logger = logging.getLogger(__name__)

FilterFunction = Callable[[Any], Any]
NodePredicate = Callable[[dict[str, Any]], bool]
NodeTransform = Callable[[dict[str, Any]], Any]


class PandocFilter(ABC):
    """Base class for class-based filters.

    Subclasses implement ``predicate`` and ``transform``. Calling the filter
    walks the AST once and rewrites every node the predicate accepts, so each
    node is visited exactly once per call.

    """

    name: ClassVar[str] = "filter"

    @abstractmethod
    def predicate(self, node: dict[str, Any]) -> bool:
        """Return True if ``node`` should be transformed."""

    @abstractmethod
    def transform(self, node: dict[str, Any]) -> Any:
        """Return the replacement for ``node`` (or None to remove it)."""

    def visit(self, node: dict[str, Any]) -> Any:
        """Transform ``node`` if it matches, otherwise return it unchanged."""
        if self.predicate(node):
            return self.transform(node)
        return node

    def __call__(self, ast: Any) -> Any:
        """Apply the filter to ``ast`` and return the new AST."""
        return walk(self.visit, ast)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CodeBlockFilter(PandocFilter):
    """Filter that rewrites ``CodeBlock`` nodes carrying one of ``classes``.

    Subclasses set ``classes`` and implement ``transform_block``, which
    receives a typed ``CodeBlock`` view instead of the raw JSON node.

    Examples
    --------
    >>> class ShoutFilter(CodeBlockFilter):
    ...     name = "shout"
    ...     classes = ("shout",)
    ...     def transform_block(self, block):
    ...         return code_block(block.text.upper(), block.attr)

    """

    classes: ClassVar[tuple[str, ...]] = ()

    def predicate(self, node: dict[str, Any]) -> bool:
        block = CodeBlock.from_node(node)
        return block is not None and block.attr.has_any_class(self.classes)

    def transform(self, node: dict[str, Any]) -> Any:
        block = CodeBlock.from_node(node)
        if block is None:
            return node
        return self.transform_block(block)

    @abstractmethod
    def transform_block(self, block: CodeBlock) -> Any:
        """Return the replacement node for a matching code block."""


class FunctionFilter(PandocFilter):
    """Filter assembled from a plain predicate and transform.

    Parameters
    ----------
    predicate : callable
        ``node -> bool``
    transform : callable
        ``node -> node'``
    name : str, optional
        Name used in log messages

    Examples
    --------
    >>> unwrap = FunctionFilter(
    ...     lambda n: n["t"] == "Para",
    ...     lambda n: make_node("Plain", n["c"]),
    ...     name="unwrap-paragraphs",
    ... )

    """

    def __init__(self, predicate: NodePredicate, transform: NodeTransform, name: Optional[str] = None):
        """Initialize the filter from its two functions."""
        self._predicate = predicate
        self._transform = transform
        self.name = name or getattr(transform, "__name__", "function-filter")  # type: ignore[misc]

    def predicate(self, node: dict[str, Any]) -> bool:
        return bool(self._predicate(node))

    def transform(self, node: dict[str, Any]) -> Any:
        return self._transform(node)

    def __repr__(self) -> str:
        return f"FunctionFilter(name={self.name!r})"


def filter_name(filter_fn: FilterFunction) -> str:
    """Return a readable name for a filter callable."""
    name = getattr(filter_fn, "name", None)
    if isinstance(name, str):
        return name
    return getattr(filter_fn, "__name__", type(filter_fn).__name__)


def safe_filter(filter_fn: FilterFunction) -> FilterFunction:
    """Wrap a filter so that its failure cannot break the pipeline.

    The returned filter runs ``filter_fn`` inside a failure boundary. If it
    raises, the error and its traceback are logged once at ERROR level and the
    AST that was passed in is returned as is.

    Parameters
    ----------
    filter_fn : callable
        Filter to protect

    Returns
    -------
    callable
        Filter with the same interface

    Examples
    --------
    >>> guarded = safe_filter(flaky_filter)
    >>> guarded(ast) is ast  # when flaky_filter raises
    True

    """
    name = filter_name(filter_fn)

    def guarded(ast: Any) -> Any:
        try:
            return filter_fn(ast)
        except Exception as e:
            logger.error(f"Filter '{name}' failed, leaving document unchanged: {e}", exc_info=True)
            return ast

    guarded.__name__ = f"safe({name})"
    guarded.name = name  # type: ignore[attr-defined]
    guarded.wrapped = filter_fn  # type: ignore[attr-defined]
    return guarded


def compose_filters(*filters: FilterFunction) -> FilterFunction:
    """Chain filters so that each runs on the output of the previous one.

    ``compose_filters(f1, f2, f3)(ast) == f3(f2(f1(ast)))``. There is no
    short-circuiting and no rollback; a filter that cannot handle what an
    earlier one produced should render that as an error node itself.

    Parameters
    ----------
    *filters : callable
        Filters in application order

    Returns
    -------
    callable
        The combined filter

    """
    chain = tuple(filters)

    def composed(ast: Any) -> Any:
        result = ast
        for filter_fn in chain:
            logger.debug("Applying filter '%s'", filter_name(filter_fn))
            result = filter_fn(result)
        return result

    composed.__name__ = "compose(" + ", ".join(filter_name(f) for f in chain) + ")"
    composed.filters = chain  # type: ignore[attr-defined]
    return composed
