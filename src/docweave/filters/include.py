#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/include.py
"""File inclusion filter.

Replaces code blocks marked with the ``include`` class by the contents of the
file they name. Markdown:

    ```{.include}
    chapters/intro.md
    ```

    ```{.include base="/docs"}
    chapters/intro.md
    ```

    ```{.include mode=code lang=python}
    examples/hello.py
    ```

Attributes
----------
base
    Directory that relative paths in this block resolve against. Applies to
    this block only; includes nested inside the included file resolve against
    that file's own directory.
mode
    ``parse`` (default): convert the file with Pandoc and splice its blocks in,
    wrapped in a ``Div`` with class ``included`` and a ``source`` attribute.
    Includes inside the file are expanded too.
    ``code``: show the file verbatim as a code block.
    ``raw``: pass the file through as a raw block.
lang
    Language class for ``code`` mode.
format
    Raw format for ``raw`` mode (default ``markdown``).

Every failure (cycle, missing file, Pandoc failure, unknown mode) turns into a
visible code block with class ``include-error`` in place of the include, so a
broken include never aborts the rest of the document. Nesting deeper than
``max_depth`` stops expanding silently.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from docweave.ast.nodes import Attr, CodeBlock, code_block, div, raw_block
from docweave.ast.walk import walk
from docweave.constants import (
    DEFAULT_INCLUDE_MODE,
    DEFAULT_MAX_INCLUDE_DEPTH,
    DEFAULT_PANDOC_EXECUTABLE,
    DEFAULT_RAW_FORMAT,
    INCLUDE_BASE_ATTR,
    INCLUDE_CLASS,
    INCLUDE_ERROR_CLASS,
    INCLUDE_FORMAT_ATTR,
    INCLUDE_LANG_ATTR,
    INCLUDE_MODE_ATTR,
    INCLUDE_MODES,
    INCLUDE_SOURCE_ATTR,
    INCLUDED_CLASS,
)
from docweave.converter import BlockConverter, PandocConverter
from docweave.exceptions import ConverterError
from docweave.filters.base import CodeBlockFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncludeContext:
    """State threaded through one inclusion pass.

    A context is never modified. Expanding a nested include produces a new
    context through ``descend``, so sibling includes never see each other's
    stack entries.

    Parameters
    ----------
    base_dir : str
        Absolute directory relative references resolve against
    stack : tuple of str
        Absolute paths of the files currently being included, outermost first
    depth : int
        Number of include levels above this pass
    max_depth : int
        Passes at this depth or deeper leave include blocks untouched

    """

    base_dir: str
    stack: tuple[str, ...] = ()
    depth: int = 0
    max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH

    @property
    def exhausted(self) -> bool:
        """True when this pass may not expand any more includes."""
        return self.depth >= self.max_depth

    def descend(self, path: str) -> IncludeContext:
        """Return the context for the contents of the included file ``path``."""
        return replace(
            self,
            base_dir=os.path.dirname(path),
            stack=self.stack + (path,),
            depth=self.depth + 1,
        )


def normalize_path(path: str) -> str:
    """Collapse ``.``, ``..`` and duplicate separators without touching the filesystem."""
    return os.path.normpath(path)


def resolve_path(path: str, base_dir: Optional[str] = None) -> str:
    """Resolve ``path`` against ``base_dir`` into an absolute, normalized path.

    Parameters
    ----------
    path : str
        Relative or absolute file reference
    base_dir : str, optional
        Directory for relative references (current directory when omitted)

    Returns
    -------
    str
        Absolute normalized path

    """
    if os.path.isabs(path):
        return normalize_path(path)
    base = os.path.abspath(base_dir or os.curdir)
    return normalize_path(os.path.join(base, path))


def detect_cycle(path: str, stack: tuple[str, ...] | list[str]) -> bool:
    """Return True if ``path`` is already being included."""
    return path in stack


def make_error_block(requested: str, message: str) -> dict[str, Any]:
    """Create the visible error block that replaces a failed include."""
    return code_block(
        f"ERROR including file: {requested}\n{message}",
        Attr(classes=(INCLUDE_ERROR_CLASS,)),
    )


class IncludeFilter(CodeBlockFilter):
    """Filter splicing external files into the document.

    Parameters
    ----------
    base_dir : str, optional
        Directory for relative includes at the top level. Defaults to the
        directory of ``source`` if given, else the current directory.
    max_depth : int, default 10
        Maximum nesting of includes that will be expanded
    source : str, optional
        Path of the document being filtered. It seeds the include stack so a
        document including itself is reported as a cycle.
    converter : callable, optional
        Turns markup text into Pandoc blocks for ``parse`` mode. Defaults to
        ``PandocConverter(pandoc)``.
    pandoc : str, default "pandoc"
        Pandoc executable used by the default converter

    Examples
    --------
    >>> include = IncludeFilter(base_dir="docs", max_depth=5)
    >>> new_ast = include(ast)

    """

    name = "include"
    classes = (INCLUDE_CLASS,)

    def __init__(
        self,
        base_dir: Optional[str] = None,
        max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
        source: Optional[str] = None,
        converter: Optional[BlockConverter] = None,
        pandoc: str = DEFAULT_PANDOC_EXECUTABLE,
    ):
        """Initialize the filter with its top-level settings."""
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self.base_dir = base_dir
        self.max_depth = max_depth
        self.source = source
        self.converter: BlockConverter = converter if converter is not None else PandocConverter(pandoc)

    def root_context(self) -> IncludeContext:
        """Build the context for a top-level call."""
        stack: tuple[str, ...] = ()
        base_dir = self.base_dir
        if self.source:
            source_path = resolve_path(self.source)
            stack = (source_path,)
            if base_dir is None:
                base_dir = os.path.dirname(source_path)
        return IncludeContext(
            base_dir=os.path.abspath(base_dir or os.curdir),
            stack=stack,
            max_depth=self.max_depth,
        )

    def __call__(self, ast: Any) -> Any:
        """Expand every include in ``ast`` with a fresh context."""
        return self.expand(ast, self.root_context())

    def expand(self, ast: Any, context: IncludeContext) -> Any:
        """Expand the includes in ``ast`` under ``context``.

        Returns ``ast`` itself when the context has reached its depth limit.
        """
        if context.exhausted:
            logger.debug(f"Include depth {context.depth} reached limit {context.max_depth}; not expanding further")
            return ast

        def visit(node: dict[str, Any]) -> Any:
            if not self.predicate(node):
                return node
            block = CodeBlock.from_node(node)
            if block is None:
                return node
            return self.include_block(block, context)

        return walk(visit, ast)

    def transform_block(self, block: CodeBlock) -> Any:
        return self.include_block(block, self.root_context())

    def include_block(self, block: CodeBlock, context: IncludeContext) -> Any:
        """Return the replacement for one include block.

        Parameters
        ----------
        block : CodeBlock
            The include block
        context : IncludeContext
            Context of the pass that found the block

        Returns
        -------
        dict
            The included content, or an error block

        """
        requested = block.text.strip()
        if not requested:
            return make_error_block(requested, "Empty include path")

        base_override = block.attr.get(INCLUDE_BASE_ATTR)
        # a relative override is taken from the directory of the current pass
        effective_base = os.path.join(context.base_dir, base_override) if base_override else context.base_dir
        resolved = resolve_path(requested, effective_base)

        if detect_cycle(resolved, context.stack):
            chain = " -> ".join(context.stack + (resolved,))
            logger.warning(f"Include cycle detected: {chain}")
            return make_error_block(requested, f"Include cycle detected: {chain}")

        mode = block.attr.get(INCLUDE_MODE_ATTR) or DEFAULT_INCLUDE_MODE
        if mode not in INCLUDE_MODES:
            logger.warning(f"Unknown include mode '{mode}' for {requested}")
            return make_error_block(requested, f"Unknown include mode: {mode}")

        try:
            with open(resolved, encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.warning(f"Included file not found: {resolved}")
            return make_error_block(requested, f"File not found: {resolved}")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read included file {resolved}: {e}")
            return make_error_block(requested, f"Error reading file: {e}")

        logger.debug(f"Including {resolved} (mode={mode}, depth={context.depth})")

        if mode == "code":
            lang = block.attr.get(INCLUDE_LANG_ATTR)
            return code_block(content, Attr(classes=(lang,) if lang else ()))

        if mode == "raw":
            return raw_block(block.attr.get(INCLUDE_FORMAT_ATTR) or DEFAULT_RAW_FORMAT, content)

        return self._include_parsed(requested, resolved, content, context)

    def _include_parsed(self, requested: str, resolved: str, content: str, context: IncludeContext) -> Any:
        try:
            blocks = self.converter(content)
        except ConverterError as e:
            logger.warning(f"Could not parse included file {resolved}: {e}")
            return make_error_block(requested, str(e))

        nested = self.expand(blocks, context.descend(resolved))
        return div(
            nested,
            Attr(classes=(INCLUDED_CLASS,), attributes=((INCLUDE_SOURCE_ATTR, resolved),)),
        )

    def __repr__(self) -> str:
        return f"IncludeFilter(base_dir={self.base_dir!r}, max_depth={self.max_depth})"
