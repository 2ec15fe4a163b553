"""Pytest configuration and shared fixtures for the docweave test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from docweave.ast import code_block, header, new_document, para, str_inline
from docweave.ast.nodes import Attr
from docweave.filters.registry import filter_registry


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


def json_blocks_converter(text: str) -> list[Any]:
    """Converter that reads included files as Pandoc JSON instead of running pandoc.

    Test fixtures store included documents as JSON so parse mode can be
    exercised without a pandoc binary.
    """
    return json.loads(text)["blocks"]


@pytest.fixture
def json_converter() -> Callable[[str], list[Any]]:
    """Provide the JSON-reading converter."""
    return json_blocks_converter


@pytest.fixture
def write_doc() -> Callable[..., Path]:
    """Provide a helper writing a JSON document made of ``blocks`` to ``path``."""

    def _write(path: Path, blocks: list[Any]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(new_document(blocks)), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_ast() -> dict[str, Any]:
    """Create a small document with a header, a paragraph and a plain code block."""
    return new_document(
        [
            header(1, [str_inline("Title")], Attr(identifier="title")),
            para([str_inline("Hello")]),
            code_block("print('not executed')", Attr(classes=("python",))),
        ]
    )


@pytest.fixture
def clean_registry():
    """Reset the global filter registry before and after a test."""
    filter_registry.clear()
    yield filter_registry
    filter_registry.clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo CLI logging configuration so one test's handlers and level never leak into the next."""
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        # pytest manages its own capture handlers
        if handler not in before and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
