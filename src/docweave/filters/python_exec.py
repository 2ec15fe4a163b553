#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/python_exec.py
"""Python code execution filter.

Runs code blocks marked ``python-exec`` (or ``py-exec``) and replaces each with
a code block showing the original source followed by what it printed and the
value of its last expression:

    ```{.python-exec}
    numbers = [1, 2, 3]
    print("summing")
    sum(numbers)
    ```

becomes

    # Original code:
    numbers = [1, 2, 3]
    print("summing")
    sum(numbers)

    # Execution result:
    Output:
    summing

    Result:
    6

All blocks in one pass share a single namespace, in document order, so later
blocks can use names defined by earlier ones. Code runs in this interpreter
with no sandbox.
"""

from __future__ import annotations

import ast as pyast
import contextlib
import io
import logging
from dataclasses import dataclass
from typing import Any, Optional

from docweave.ast.nodes import CodeBlock
from docweave.constants import PYTHON_EXEC_CLASSES
from docweave.filters.base import CodeBlockFilter

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of running one block.

    Parameters
    ----------
    result : Any
        Value of the trailing expression, or None
    output : str
        Captured stdout
    error : str
        Captured stderr
    exception : BaseException, optional
        Exception raised by the code, if any

    """

    result: Any = None
    output: str = ""
    error: str = ""
    exception: Optional[BaseException] = None


def execute_python(code: str, namespace: Optional[dict[str, Any]] = None) -> ExecutionResult:
    """Execute ``code`` and capture its output.

    If the last statement is an expression its value becomes the result, the
    way the interactive interpreter echoes it.

    Parameters
    ----------
    code : str
        Python source
    namespace : dict, optional
        Globals to run in; updated in place. A fresh one is used if omitted.

    Returns
    -------
    ExecutionResult
        Captured output, result and exception

    """
    scope = namespace if namespace is not None else {"__name__": "__docweave__"}
    stdout = io.StringIO()
    stderr = io.StringIO()
    outcome = ExecutionResult()

    try:
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            tree = pyast.parse(code, mode="exec")
            trailing: Optional[pyast.Expression] = None
            if tree.body and isinstance(tree.body[-1], pyast.Expr):
                trailing = pyast.Expression(body=tree.body.pop().value)
            exec(compile(tree, "<python-exec>", "exec"), scope)
            if trailing is not None:
                outcome.result = eval(compile(trailing, "<python-exec>", "eval"), scope)
    except (Exception, SystemExit) as e:
        outcome.exception = e

    outcome.output = stdout.getvalue()
    outcome.error = stderr.getvalue()
    return outcome


def format_execution_result(outcome: ExecutionResult) -> str:
    """Render an execution outcome as the text shown in the document."""
    parts = []
    if outcome.output.strip():
        parts.append(f"Output:\n{outcome.output}")
    if outcome.exception is None:
        parts.append(f"Result:\n{outcome.result}")
    else:
        parts.append(f"ERROR: {type(outcome.exception).__name__}: {outcome.exception}")
    if outcome.exception is None and outcome.error.strip():
        parts.append(f"Warnings:\n{outcome.error}")
    return "\n\n".join(parts)


class PythonExecFilter(CodeBlockFilter):
    """Filter executing ``python-exec`` code blocks.

    The replacement block keeps the original attributes so the result still
    renders as Python.

    """

    name = "python-exec"
    classes = PYTHON_EXEC_CLASSES

    def __init__(self) -> None:
        """Initialize the filter with an empty namespace."""
        self.namespace: dict[str, Any] = {}

    def __call__(self, ast: Any) -> Any:
        """Run every block of ``ast`` in a namespace fresh for this pass."""
        self.namespace = {"__name__": "__docweave__"}
        try:
            return super().__call__(ast)
        finally:
            self.namespace = {}

    def transform_block(self, block: CodeBlock) -> Any:
        outcome = execute_python(block.text, self.namespace)
        if outcome.exception is not None:
            logger.info(f"python-exec block raised {type(outcome.exception).__name__}: {outcome.exception}")
        text = f"# Original code:\n{block.text}\n\n# Execution result:\n{format_execution_result(outcome)}"
        return CodeBlock(text=text, attr=block.attr).to_node()
