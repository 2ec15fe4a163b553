#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/ast/__init__.py
"""Pandoc AST model for docweave.

This package works directly on the JSON tree Pandoc emits with ``-t json``:

- ``nodes``: recognizing, building and reading nodes, plus typed views
  (``Attr``, ``CodeBlock``) for the node kinds filters rewrite
- ``walk``: generic postorder traversal and node collection
- ``serialization``: reading and writing documents

"""

from docweave.ast.nodes import (
    MISSING,
    Attr,
    CodeBlock,
    code_block,
    div,
    header,
    image,
    is_node,
    make_node,
    node_content,
    node_type,
    para,
    plain,
    raw_block,
    str_inline,
)
from docweave.ast.serialization import ast_to_json, json_to_ast, new_document, read_ast, write_ast
from docweave.ast.walk import filter_nodes, iter_nodes, walk

__all__ = [
    "MISSING",
    "Attr",
    "CodeBlock",
    "code_block",
    "div",
    "header",
    "image",
    "is_node",
    "make_node",
    "node_content",
    "node_type",
    "para",
    "plain",
    "raw_block",
    "str_inline",
    "ast_to_json",
    "json_to_ast",
    "new_document",
    "read_ast",
    "write_ast",
    "filter_nodes",
    "iter_nodes",
    "walk",
]
