#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/sqlite_exec.py
"""SQLite query filter.

Runs code blocks marked ``sqlite-exec`` (or ``sqlite``) against a SQLite
database and replaces them with the query results:

    ```{.sqlite-exec db="data.db"}
    SELECT name, count(*) AS total FROM users GROUP BY name;
    ```

Attributes
----------
db
    Database file. Defaults to an in-memory database.
format
    ``table`` (default) renders a Pandoc table; ``text`` renders an aligned
    plain-text table inside a code block.

A block may hold several statements; they run in order and the rows of the
last statement that returned rows are shown. One connection per database is
kept for the whole pass, so a table created in an earlier block (including in
the in-memory database) is visible to later blocks. SQL errors are shown in
place of the results, and a failing block is rolled back as a whole: changes
made by its earlier statements are never saved, whatever blocks follow.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

from docweave.ast.nodes import Attr, CodeBlock, make_node, para, plain, str_inline
from docweave.constants import (
    DEFAULT_SQLITE_FORMAT,
    SQLITE_DB_ATTR,
    SQLITE_EXEC_CLASSES,
    SQLITE_FORMAT_ATTR,
    SQLITE_MEMORY_DB,
)
from docweave.filters.base import CodeBlockFilter

logger = logging.getLogger(__name__)

QueryResult = tuple[list[str], list[tuple[Any, ...]]]


def split_statements(sql: str) -> list[str]:
    """Split SQL text into complete statements using SQLite's own tokenizer rules."""
    statements = []
    buffer = ""
    for char in sql:
        buffer += char
        if char == ";" and sqlite3.complete_statement(buffer):
            if buffer.strip():
                statements.append(buffer.strip())
            buffer = ""
    if buffer.strip():
        # trailing statement without a semicolon
        statements.append(buffer.strip())
    return statements


def execute_sql(connection: sqlite3.Connection, sql: str) -> QueryResult:
    """Execute every statement in ``sql`` and return the last result set.

    Returns
    -------
    tuple of (list of str, list of tuple)
        Column names and rows. Both are empty when no statement returned rows.

    Raises
    ------
    sqlite3.Error
        If any statement fails. Uncommitted changes are rolled back first.

    """
    columns: list[str] = []
    rows: list[tuple[Any, ...]] = []
    try:
        for statement in split_statements(sql):
            cursor = connection.execute(statement)
            if cursor.description is not None:
                columns = [column[0] for column in cursor.description]
                rows = [tuple(row) for row in cursor.fetchall()]
    except (sqlite3.Error, sqlite3.Warning):
        connection.rollback()
        raise
    connection.commit()
    return columns, rows


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def format_text_results(columns: list[str], rows: list[tuple[Any, ...]]) -> str:
    """Format a result set as an aligned plain-text table."""
    if not columns or not rows:
        return "No results"

    widths = [len(column) for column in columns]
    for row in rows:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(_cell_text(value)))

    def format_row(values: list[str]) -> str:
        return " | ".join(value.ljust(width) for value, width in zip(values, widths))

    lines = [format_row(list(columns)), "-+-".join("-" * width for width in widths)]
    lines.extend(format_row([_cell_text(value) for value in row]) for row in rows)
    return "\n".join(lines)


def _table_cell(text: str) -> list[Any]:
    # Cell: [attr, alignment, row span, col span, blocks]
    return [Attr().to_json(), make_node("AlignDefault"), 1, 1, [plain([str_inline(text)])]]


def _table_row(values: list[str]) -> list[Any]:
    return [Attr().to_json(), [_table_cell(value) for value in values]]


def make_pandoc_table(columns: list[str], rows: list[tuple[Any, ...]]) -> dict[str, Any]:
    """Build a Pandoc ``Table`` node (API 1.23 layout) for a result set.

    An empty result set becomes a paragraph reading "No results".
    """
    if not columns or not rows:
        return para([str_inline("No results")])

    colspecs = [[make_node("AlignDefault"), make_node("ColWidthDefault")] for _ in columns]
    caption = [None, []]
    head = [Attr().to_json(), [_table_row(list(columns))]]
    body = [Attr().to_json(), 0, [], [_table_row([_cell_text(value) for value in row]) for row in rows]]
    foot = [Attr().to_json(), []]
    return make_node("Table", [Attr().to_json(), caption, colspecs, head, [body], foot])


class SqliteExecFilter(CodeBlockFilter):
    """Filter executing ``sqlite-exec`` code blocks.

    Parameters
    ----------
    db : str, optional
        Database used by blocks without a ``db`` attribute. Defaults to an
        in-memory database.

    """

    name = "sqlite-exec"
    classes = SQLITE_EXEC_CLASSES

    def __init__(self, db: Optional[str] = None) -> None:
        """Initialize the filter with its default database."""
        self.db = db or SQLITE_MEMORY_DB
        self._connections: dict[str, sqlite3.Connection] = {}

    def __call__(self, ast: Any) -> Any:
        """Run every query of ``ast``, closing all connections afterwards."""
        try:
            return super().__call__(ast)
        finally:
            for connection in self._connections.values():
                connection.close()
            self._connections = {}

    def connection(self, db: str) -> sqlite3.Connection:
        """Return the connection to ``db`` for this pass, opening it on first use."""
        if db not in self._connections:
            logger.debug(f"Opening SQLite database {db}")
            self._connections[db] = sqlite3.connect(db)
        return self._connections[db]

    def transform_block(self, block: CodeBlock) -> Any:
        db = block.attr.get(SQLITE_DB_ATTR) or self.db
        output_format = block.attr.get(SQLITE_FORMAT_ATTR) or DEFAULT_SQLITE_FORMAT

        try:
            columns, rows = execute_sql(self.connection(db), block.text)
        except (sqlite3.Error, sqlite3.Warning) as e:
            logger.info(f"sqlite-exec query against {db} failed: {e}")
            return CodeBlock(text=f"-- SQL Query:\n{block.text}\n\n-- ERROR:\n{e}", attr=block.attr).to_node()

        if output_format == "table":
            return make_pandoc_table(columns, rows)

        text = f"-- SQL Query:\n{block.text}\n\n-- Results:\n{format_text_results(columns, rows)}"
        return CodeBlock(text=text, attr=block.attr).to_node()
