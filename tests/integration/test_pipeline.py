#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for filter chains over whole documents."""

import io
import json
import shutil

import pytest

from docweave import apply_filters, build_pipeline, run_filter
from docweave.ast.nodes import Attr, CodeBlock, code_block, para, str_inline
from docweave.ast.serialization import new_document
from docweave.ast.walk import filter_nodes
from docweave.converter import PandocConverter
from docweave.filters import IncludeFilter, PythonExecFilter, compose_filters


def _include(path, **attributes):
    return code_block(path, Attr(classes=("include",), attributes=tuple(attributes.items())))


def _py(code):
    return code_block(code, Attr(classes=("python-exec",)))


@pytest.mark.integration
class TestIncludeThenExecute:
    """Included code blocks are visible to later filters in the same chain."""

    def test_included_block_executed(self, tmp_path, write_doc, json_converter):
        """An execution block from an included file runs in the same composed pass."""
        write_doc(tmp_path / "part.json", [_py("21 * 2")])
        doc = new_document([_include("part.json")])

        pipeline = compose_filters(IncludeFilter(base_dir=str(tmp_path), converter=json_converter), PythonExecFilter())
        result = pipeline(doc)

        div = result["blocks"][0]
        assert div["t"] == "Div"
        executed = CodeBlock.from_node(div["c"][1][0])
        assert executed.text == "# Original code:\n21 * 2\n\n# Execution result:\nResult:\n42"

    def test_nested_includes_share_namespace(self, tmp_path, write_doc, json_converter):
        """Blocks from different included files share one execution namespace."""
        write_doc(tmp_path / "define.json", [_py("total = 40")])
        write_doc(tmp_path / "sub" / "use.json", [_py("total + 2")])
        write_doc(tmp_path / "sub" / "outer.json", [_include("use.json")])
        doc = new_document([_include("define.json"), _include("sub/outer.json")])

        pipeline = compose_filters(IncludeFilter(base_dir=str(tmp_path), converter=json_converter), PythonExecFilter())
        result = pipeline(doc)

        texts = [CodeBlock.from_node(node).text for node in filter_nodes(result, "CodeBlock")]
        assert texts[-1].endswith("Result:\n42")

    def test_reverse_order_leaves_included_blocks(self, tmp_path, write_doc, json_converter):
        """Executing before including leaves the spliced blocks unexecuted."""
        write_doc(tmp_path / "part.json", [_py("21 * 2")])
        doc = new_document([_include("part.json")])

        pipeline = compose_filters(PythonExecFilter(), IncludeFilter(base_dir=str(tmp_path), converter=json_converter))
        result = pipeline(doc)

        assert CodeBlock.from_node(result["blocks"][0]["c"][1][0]).text == "21 * 2"


@pytest.mark.integration
class TestRegistryPipelines:
    """Tests for building chains by name."""

    def test_apply_filters_with_options(self, tmp_path):
        """Options reach the filters they are keyed by, aliases included."""
        (tmp_path / "query.sql").write_text("SELECT 1", encoding="utf-8")
        doc = new_document([_include("query.sql", mode="code", lang="sqlite"), para([str_inline("kept")])])

        result = apply_filters(doc, ["include", "sqlite"], {"include": {"base_dir": str(tmp_path)}})

        assert result["blocks"][0]["t"] == "Table"
        assert result["blocks"][1] == para([str_inline("kept")])

    def test_safe_pipeline_survives_bad_option(self):
        """A filter constructed with a wrong option type fails in isolation."""
        pipeline = build_pipeline(["python-exec", "include"], {"include": {"base_dir": 7}})
        doc = new_document([_include("x.md"), _py("1")])

        result = pipeline(doc)

        assert CodeBlock.from_node(result["blocks"][1]).text.endswith("Result:\n1")
        assert result["blocks"][0] == doc["blocks"][0]


@pytest.mark.integration
class TestRunFilter:
    """Tests for run_filter."""

    def test_files(self, tmp_path, write_doc):
        """Documents are read from and written to files."""
        source = write_doc(tmp_path / "in.json", [_py("'hi'.upper()")])
        destination = tmp_path / "out.json"

        result = run_filter(PythonExecFilter(), source, destination)

        assert json.loads(destination.read_text(encoding="utf-8")) == result
        assert CodeBlock.from_node(result["blocks"][0]).text.endswith("Result:\nHI")

    def test_streams(self):
        """Open text streams are read and written without being closed."""
        source = io.StringIO(json.dumps(new_document([_py("print('x')")])))
        destination = io.StringIO()

        run_filter(PythonExecFilter(), source, destination)

        written = json.loads(destination.getvalue())
        assert "Output:\nx\n" in written["blocks"][0]["c"][1]
        assert not destination.closed

    def test_untouched_document_is_identical(self, tmp_path):
        """Documents without matching nodes are written back byte for byte."""
        text = (
            '{"pandoc-api-version":[1,23,1],"meta":{"title":{"t":"MetaInlines","c":[{"t":"Str","c":"Ünï"}]}},'
            '"blocks":[{"t":"Para","c":[{"t":"Str","c":"a"},{"t":"Space"},{"t":"Str","c":"b"}]}]}'
        )
        source = tmp_path / "in.json"
        source.write_text(text, encoding="utf-8")
        destination = tmp_path / "out.json"

        run_filter(IncludeFilter(), source, destination)

        assert destination.read_text(encoding="utf-8") == text


@pytest.mark.integration
@pytest.mark.slow
@pytest.mark.skipif(shutil.which("pandoc") is None, reason="pandoc is not installed")
class TestWithPandoc:
    """Tests that run the real pandoc binary."""

    def test_parse_markdown_includes(self, tmp_path):
        """Markdown includes are parsed and nested includes resolve from the included file."""
        chapters = tmp_path / "chapters"
        chapters.mkdir()
        (chapters / "one.md").write_text("# Chapter One\n\n```{.include}\nnote.md\n```\n", encoding="utf-8")
        (chapters / "note.md").write_text("A *note*.\n", encoding="utf-8")
        main_text = "```{.include}\nchapters/one.md\n```\n"

        doc = PandocConverter().parse(main_text)
        result = IncludeFilter(base_dir=str(tmp_path))(doc)

        divs = filter_nodes(result, "Div")
        sources = [dict(node["c"][0][2])["source"] for node in divs]
        assert sorted(sources) == [str(chapters / "note.md"), str(chapters / "one.md")]
        assert filter_nodes(result, "Header")
        assert filter_nodes(result, "Emph")
        assert not filter_nodes(result, "CodeBlock")
