#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for Pandoc node helpers and typed views."""

import pytest

from docweave.ast.nodes import (
    Attr,
    CodeBlock,
    code_block,
    div,
    image,
    is_node,
    make_node,
    node_content,
    node_type,
    raw_block,
)


@pytest.mark.unit
class TestNodePredicates:
    """Tests for recognizing and reading nodes."""

    def test_is_node(self):
        """Only dicts with a type tag are nodes."""
        assert is_node({"t": "Space"})
        assert is_node({"t": "Str", "c": "x"})
        assert not is_node({"c": "x"})
        assert not is_node(["t", "Str"])
        assert not is_node("Str")
        assert not is_node(None)

    def test_node_type_and_content(self):
        """Type and payload are read from the wire keys."""
        node = {"t": "Str", "c": "hello"}
        assert node_type(node) == "Str"
        assert node_content(node) == "hello"

    def test_content_of_nullary_node(self):
        """Nodes without a payload report None."""
        assert node_content({"t": "Space"}) is None

    def test_make_node_without_content(self):
        """Omitting content produces a node with no 'c' key."""
        assert make_node("HorizontalRule") == {"t": "HorizontalRule"}

    def test_make_node_with_null_content(self):
        """An explicit None payload is kept."""
        assert make_node("Foo", None) == {"t": "Foo", "c": None}


@pytest.mark.unit
class TestAttr:
    """Tests for the attribute triple."""

    def test_from_json(self):
        """A well-formed triple is read completely."""
        attr = Attr.from_json(["sec", ["include", "x"], [["mode", "code"], ["lang", "py"]]])
        assert attr.identifier == "sec"
        assert attr.classes == ("include", "x")
        assert attr.attributes == (("mode", "code"), ("lang", "py"))

    def test_round_trip_json(self):
        """to_json restores the wire form."""
        triple = ["id", ["a", "b"], [["k", "v"]]]
        assert Attr.from_json(triple).to_json() == triple

    def test_malformed_triple_is_lenient(self):
        """Missing or broken parts become empty."""
        assert Attr.from_json(None) == Attr()
        assert Attr.from_json(["only-id"]) == Attr(identifier="only-id")
        attr = Attr.from_json(["", "not-a-list", [["k", "v"], ["broken"]]])
        assert attr.classes == ()
        assert attr.attributes == (("k", "v"),)

    def test_class_membership_is_exact(self):
        """Class matching does not match prefixes or case variants."""
        attr = Attr(classes=("include",))
        assert attr.has_class("include")
        assert not attr.has_class("inc")
        assert not attr.has_class("Include")
        assert attr.has_any_class(("python", "include"))
        assert not attr.has_any_class(("python",))

    def test_get_returns_first_match(self):
        """Repeated keys resolve to the first occurrence."""
        attr = Attr(attributes=(("mode", "code"), ("mode", "raw")))
        assert attr.get("mode") == "code"
        assert attr.get("missing") is None
        assert attr.get("missing", "parse") == "parse"


@pytest.mark.unit
class TestCodeBlock:
    """Tests for the CodeBlock view."""

    def test_from_node(self):
        """A CodeBlock node is viewed as text plus attributes."""
        node = {"t": "CodeBlock", "c": [["", ["include"], []], "chapter.md\n"]}
        block = CodeBlock.from_node(node)
        assert block is not None
        assert block.text == "chapter.md\n"
        assert block.attr.has_class("include")

    def test_from_other_node(self):
        """Other node types have no CodeBlock view."""
        assert CodeBlock.from_node({"t": "Para", "c": []}) is None
        assert CodeBlock.from_node({"t": "CodeBlock", "c": "broken"}) is None
        assert CodeBlock.from_node("text") is None

    def test_to_node_round_trip(self):
        """Converting back yields the original node."""
        node = {"t": "CodeBlock", "c": [["x", ["a"], [["k", "v"]]], "code"]}
        assert CodeBlock.from_node(node).to_node() == node


@pytest.mark.unit
class TestBuilders:
    """Tests for node builders."""

    def test_code_block(self):
        """code_block defaults to empty attributes."""
        assert code_block("x") == {"t": "CodeBlock", "c": [["", [], []], "x"]}

    def test_raw_block(self):
        """raw_block stores format then text."""
        assert raw_block("html", "<b>x</b>") == {"t": "RawBlock", "c": ["html", "<b>x</b>"]}

    def test_div(self):
        """div wraps blocks with attributes."""
        inner = {"t": "HorizontalRule"}
        node = div([inner], Attr(classes=("included",)))
        assert node == {"t": "Div", "c": [["", ["included"], []], [inner]]}

    def test_image(self):
        """image puts the URL and title in the target pair."""
        node = image("data:image/png;base64,AAAA", Attr(classes=("plantuml",)))
        assert node["t"] == "Image"
        assert node["c"][0] == ["", ["plantuml"], []]
        assert node["c"][1] == []
        assert node["c"][2] == ["data:image/png;base64,AAAA", ""]
