#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the generic tree walker."""

import copy

import pytest

from docweave.ast import filter_nodes, iter_nodes, walk
from docweave.ast.nodes import make_node, node_type


def _identity(node):
    return node


@pytest.mark.unit
class TestWalk:
    """Tests for walk."""

    def test_identity_preserves_structure(self, sample_ast):
        """An identity action returns an equal tree."""
        assert walk(_identity, sample_ast) == sample_ast

    def test_input_is_not_mutated(self, sample_ast):
        """The input tree is left exactly as it was."""
        before = copy.deepcopy(sample_ast)

        def upper(node):
            if node["t"] == "Str":
                return make_node("Str", node["c"].upper())
            return node

        result = walk(upper, sample_ast)

        assert sample_ast == before
        assert result["blocks"][0]["c"][2] == [{"t": "Str", "c": "TITLE"}]

    def test_postorder(self):
        """Children are visited before their parents."""
        tree = make_node("Para", [make_node("Emph", [make_node("Str", "a")]), make_node("Space")])
        seen = []

        def record(node):
            seen.append(node["t"])
            return node

        walk(record, tree)

        assert seen == ["Str", "Emph", "Space", "Para"]

    def test_parent_sees_transformed_children(self):
        """The action receives a parent rebuilt from already transformed children."""
        tree = make_node("Para", [make_node("Str", "a")])

        def action(node):
            if node["t"] == "Str":
                return make_node("Str", "b")
            if node["t"] == "Para":
                assert node["c"] == [{"t": "Str", "c": "b"}]
            return node

        walk(action, tree)

    def test_none_removes_from_list(self):
        """A node replaced by None disappears from its list."""
        tree = {"blocks": [make_node("Para", []), make_node("HorizontalRule"), make_node("Para", [])]}

        result = walk(lambda n: None if n["t"] == "HorizontalRule" else n, tree)

        assert [b["t"] for b in result["blocks"]] == ["Para", "Para"]

    def test_existing_nulls_are_kept(self):
        """null values already in the tree are not removed."""
        caption = [None, []]
        tree = make_node("Table", [["", [], []], caption])

        assert walk(_identity, tree) == tree

    def test_scalars_pass_through(self):
        """Strings, numbers and None are returned as is."""
        assert walk(_identity, "text") == "text"
        assert walk(_identity, 3) == 3
        assert walk(_identity, None) is None

    def test_plain_dicts_are_not_passed_to_action(self):
        """Dicts without a type tag are traversed but never given to the action."""
        seen = []

        def record(node):
            seen.append(node["t"])
            return node

        walk(record, {"meta": {"title": make_node("MetaString", "x")}, "blocks": []})

        assert seen == ["MetaString"]

    def test_replacement_can_change_type(self):
        """A node can be replaced by a node of another type."""
        tree = {"blocks": [make_node("Para", [make_node("Str", "x")])]}

        result = walk(lambda n: make_node("Plain", n["c"]) if n["t"] == "Para" else n, tree)

        assert result["blocks"][0]["t"] == "Plain"


@pytest.mark.unit
class TestCollection:
    """Tests for iter_nodes and filter_nodes."""

    def test_iter_nodes_postorder(self, sample_ast):
        """All nodes are yielded, children first."""
        types = [node_type(n) for n in iter_nodes(sample_ast)]
        assert types == ["Str", "Header", "Str", "Para", "CodeBlock"]

    def test_filter_nodes_by_type(self, sample_ast):
        """Nodes can be collected by type."""
        assert len(filter_nodes(sample_ast, "Str")) == 2
        assert filter_nodes(sample_ast, "Table") == []

    def test_filter_nodes_by_predicate(self, sample_ast):
        """A predicate narrows the collection."""
        found = filter_nodes(sample_ast, "Str", lambda n: n["c"] == "Hello")
        assert found == [{"t": "Str", "c": "Hello"}]
