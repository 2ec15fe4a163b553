#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/ast/nodes.py
"""Pandoc AST node helpers.

Pandoc emits its document tree as plain JSON. A node is any object carrying a
type tag under ``"t"``; its payload (when it has one) sits under ``"c"``.
Everything else in the tree (lists, metadata maps, strings, numbers, ``null``)
is opaque data that walkers recurse into but never dispatch on.

Nodes are treated as immutable values: helpers in this module always build new
dicts and never modify the ones they are given.

The few node kinds that filters actually rewrite get typed views so that
filter code can work with attributes rather than positional lists. Conversion
between the raw JSON and a view happens only at that boundary:

    >>> block = CodeBlock.from_node(node)
    >>> if block is not None and block.attr.has_class("include"):
    ...     path = block.text.strip()

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from docweave.constants import CONTENT_KEY, TYPE_KEY

# Sentinel distinguishing "no payload" from a ``null`` payload
MISSING: Any = object()


def is_node(value: Any) -> bool:
    """Return True if ``value`` is a Pandoc AST node.

    Parameters
    ----------
    value : Any
        Any JSON value

    Returns
    -------
    bool
        True for dicts carrying a type tag

    """
    return isinstance(value, dict) and TYPE_KEY in value


def node_type(node: dict[str, Any]) -> str:
    """Return the type tag of a node (e.g. ``"Para"``)."""
    return node[TYPE_KEY]


def node_content(node: dict[str, Any]) -> Any:
    """Return the payload of a node, or None for payload-less kinds such as ``Space``."""
    return node.get(CONTENT_KEY)


def make_node(type_: str, content: Any = MISSING) -> dict[str, Any]:
    """Create a new AST node.

    Parameters
    ----------
    type_ : str
        Pandoc type tag
    content : Any, optional
        Payload. When omitted the node has no ``"c"`` key, which is how Pandoc
        encodes nullary constructors (``Space``, ``HorizontalRule``...).

    Returns
    -------
    dict
        A fresh node

    """
    if content is MISSING:
        return {TYPE_KEY: type_}
    return {TYPE_KEY: type_, CONTENT_KEY: content}


@dataclass(frozen=True)
class Attr:
    """Pandoc attribute triple ``[identifier, classes, key-value pairs]``.

    Parameters
    ----------
    identifier : str, default ""
        Element identifier
    classes : tuple of str, default empty
        Class names, compared by exact string match
    attributes : tuple of (str, str), default empty
        Key-value pairs in source order. Keys may repeat; lookups return the
        first match.

    """

    identifier: str = ""
    classes: tuple[str, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_json(cls, value: Any) -> Attr:
        """Build an Attr from its JSON triple.

        Malformed triples are read leniently: missing parts become empty.
        """
        if not isinstance(value, (list, tuple)):
            return cls()
        identifier = value[0] if len(value) > 0 and isinstance(value[0], str) else ""
        classes = tuple(value[1]) if len(value) > 1 and isinstance(value[1], list) else ()
        pairs = value[2] if len(value) > 2 and isinstance(value[2], list) else []
        attributes = tuple((str(pair[0]), str(pair[1])) for pair in pairs if isinstance(pair, list) and len(pair) == 2)
        return cls(identifier=identifier, classes=classes, attributes=attributes)

    def to_json(self) -> list[Any]:
        """Return the JSON triple for this Attr."""
        return [self.identifier, list(self.classes), [[key, value] for key, value in self.attributes]]

    def has_class(self, name: str) -> bool:
        """Return True if ``name`` is one of the classes."""
        return name in self.classes

    def has_any_class(self, names: tuple[str, ...] | list[str]) -> bool:
        """Return True if any of ``names`` is one of the classes."""
        return any(name in self.classes for name in names)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute named ``key``."""
        for attr_key, value in self.attributes:
            if attr_key == key:
                return value
        return default


@dataclass(frozen=True)
class CodeBlock:
    """Typed view of a ``CodeBlock`` node.

    Parameters
    ----------
    text : str
        The literal code
    attr : Attr
        Attributes of the block

    """

    text: str
    attr: Attr = field(default_factory=Attr)

    @classmethod
    def from_node(cls, node: Any) -> Optional[CodeBlock]:
        """Return a view of ``node`` if it is a CodeBlock, else None."""
        if not is_node(node) or node_type(node) != "CodeBlock":
            return None
        content = node_content(node)
        if not isinstance(content, list) or len(content) != 2:
            return None
        text = content[1] if isinstance(content[1], str) else ""
        return cls(text=text, attr=Attr.from_json(content[0]))

    def to_node(self) -> dict[str, Any]:
        """Return the JSON node for this block."""
        return make_node("CodeBlock", [self.attr.to_json(), self.text])


# =============================================================================
# Builders
# =============================================================================


def code_block(text: str, attr: Optional[Attr] = None) -> dict[str, Any]:
    """Create a ``CodeBlock`` node."""
    return CodeBlock(text=text, attr=attr or Attr()).to_node()


def raw_block(fmt: str, text: str) -> dict[str, Any]:
    """Create a ``RawBlock`` node holding unprocessed ``text`` in format ``fmt``."""
    return make_node("RawBlock", [fmt, text])


def div(blocks: list[Any], attr: Optional[Attr] = None) -> dict[str, Any]:
    """Create a ``Div`` grouping ``blocks``."""
    return make_node("Div", [(attr or Attr()).to_json(), list(blocks)])


def str_inline(text: str) -> dict[str, Any]:
    """Create a ``Str`` inline."""
    return make_node("Str", text)


def plain(inlines: list[Any]) -> dict[str, Any]:
    """Create a ``Plain`` block."""
    return make_node("Plain", list(inlines))


def para(inlines: list[Any]) -> dict[str, Any]:
    """Create a ``Para`` block."""
    return make_node("Para", list(inlines))


def header(level: int, inlines: list[Any], attr: Optional[Attr] = None) -> dict[str, Any]:
    """Create a ``Header`` block."""
    return make_node("Header", [level, (attr or Attr()).to_json(), list(inlines)])


def image(
    url: str,
    attr: Optional[Attr] = None,
    caption: Optional[list[Any]] = None,
    title: str = "",
) -> dict[str, Any]:
    """Create an ``Image`` inline pointing at ``url``."""
    return make_node("Image", [(attr or Attr()).to_json(), list(caption or []), [url, title]])
