#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/ast/walk.py
"""Generic traversal over Pandoc JSON ASTs.

The walker does not know the Pandoc schema. It descends into every list and
dict it meets and calls the action on each value that is a node, children
first (postorder). Because a node's children are already rewritten when the
action sees it, a filter that expands one node into a larger subtree never has
that subtree re-scanned by the same walk.

Examples
--------
Turn every paragraph into a plain block:

    >>> from docweave.ast import make_node, node_content, node_type, walk
    >>> def unwrap(node):
    ...     if node_type(node) == "Para":
    ...         return make_node("Plain", node_content(node))
    ...     return node
    >>> new_ast = walk(unwrap, ast)

Collect all headers:

    >>> headers = filter_nodes(ast, "Header")

"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

from docweave.ast.nodes import is_node, node_type

NodeAction = Callable[[dict[str, Any]], Any]


def walk(action: NodeAction, value: Any) -> Any:
    """Apply ``action`` to every node under ``value``, children before parents.

    Parameters
    ----------
    action : callable
        Called with each node after its children have been walked. It returns
        the node itself (no-op), a replacement value, or None to remove it.
    value : Any
        A Pandoc document, a fragment, or any JSON value

    Returns
    -------
    Any
        A new tree with the replacements applied. Containers are rebuilt;
        the input is never mutated.

    Notes
    -----
    A removed node is dropped from its containing list. A removed node held
    directly by a dict key (or the root itself) becomes ``None``. ``null``
    entries that were in the input are left where they are.

    """
    if isinstance(value, list):
        return _walk_list(action, value)

    if isinstance(value, dict):
        rebuilt = {key: walk(action, child) for key, child in value.items()}
        if is_node(rebuilt):
            return action(rebuilt)
        return rebuilt

    return value


def _walk_list(action: NodeAction, items: list[Any]) -> list[Any]:
    result = []
    for item in items:
        walked = walk(action, item)
        if walked is None and is_node(item):
            # removed by the action
            continue
        result.append(walked)
    return result


def iter_nodes(value: Any) -> Iterator[dict[str, Any]]:
    """Yield every node under ``value`` in postorder without modifying anything.

    Parameters
    ----------
    value : Any
        A Pandoc document, a fragment, or any JSON value

    Yields
    ------
    dict
        Each node, children before parents

    """
    if isinstance(value, list):
        for item in value:
            yield from iter_nodes(item)
    elif isinstance(value, dict):
        for child in value.values():
            yield from iter_nodes(child)
        if is_node(value):
            yield value


def filter_nodes(
    ast: Any,
    type_: Optional[str] = None,
    predicate: Optional[Callable[[dict[str, Any]], bool]] = None,
) -> list[dict[str, Any]]:
    """Return all nodes of a given type (and/or matching a predicate).

    Parameters
    ----------
    ast : Any
        Document or fragment to search
    type_ : str, optional
        Pandoc type tag to match (e.g. ``"Header"``). None matches any type.
    predicate : callable, optional
        Extra condition a node must satisfy

    Returns
    -------
    list of dict
        Matching nodes in postorder

    Examples
    --------
    >>> code_blocks = filter_nodes(ast, "CodeBlock")
    >>> level_one = filter_nodes(ast, "Header", lambda n: n["c"][0] == 1)

    """
    return [
        node
        for node in iter_nodes(ast)
        if (type_ is None or node_type(node) == type_) and (predicate is None or predicate(node))
    ]
