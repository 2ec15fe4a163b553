#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/plantuml.py
"""PlantUML diagram filter.

Renders code blocks marked ``plantuml`` (or ``uml``) with the ``plantuml``
command-line tool in pipe mode:

    ```{.plantuml format=png}
    @startuml
    Alice -> Bob: Hello
    @enduml
    ```

Image formats (svg, png, pdf, eps) become an ``Image`` with a base64 ``data:``
URI inside a paragraph. Text formats (txt, utxt, latex) become a code block
with class ``plantuml-output``. Rendering failures are shown as a code block
with class ``plantuml-error`` that keeps the diagram source.
"""

from __future__ import annotations

import base64
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Optional

from docweave.ast.nodes import Attr, CodeBlock, code_block, image, para
from docweave.constants import (
    DEFAULT_PLANTUML_EXECUTABLE,
    DEFAULT_PLANTUML_FORMAT,
    PLANTUML_CLASSES,
    PLANTUML_FORMAT_ATTR,
    PLANTUML_FORMAT_FLAGS,
    PLANTUML_MIME_TYPES,
    PLANTUML_TEXT_FORMATS,
)
from docweave.filters.base import CodeBlockFilter

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Outcome of one PlantUML invocation."""

    success: bool
    format: str
    output: bytes = b""
    error: Optional[str] = None

    @property
    def is_text(self) -> bool:
        return self.format in PLANTUML_TEXT_FORMATS


def normalize_format(fmt: Optional[str]) -> str:
    """Return a supported output format, falling back to svg."""
    candidate = (fmt or DEFAULT_PLANTUML_FORMAT).lower()
    if candidate not in PLANTUML_FORMAT_FLAGS:
        logger.warning(f"Unsupported PlantUML format '{fmt}', using {DEFAULT_PLANTUML_FORMAT}")
        return DEFAULT_PLANTUML_FORMAT
    return candidate


def render_plantuml(code: str, fmt: str, executable: str = DEFAULT_PLANTUML_EXECUTABLE) -> RenderResult:
    """Run PlantUML on ``code`` and return the rendered bytes.

    Parameters
    ----------
    code : str
        Diagram source
    fmt : str
        A supported output format
    executable : str, default "plantuml"
        PlantUML binary name or path

    Returns
    -------
    RenderResult
        Rendered output, or the reason rendering failed

    """
    command = [executable, "-pipe", PLANTUML_FORMAT_FLAGS[fmt]]
    try:
        result = subprocess.run(command, input=code.encode("utf-8"), capture_output=True, check=False)
    except OSError as e:
        return RenderResult(success=False, format=fmt, error=f"Failed to execute PlantUML: {e}")

    if result.returncode != 0:
        detail = result.stderr.decode("utf-8", errors="replace").strip()
        message = f"PlantUML exited with code {result.returncode}"
        return RenderResult(success=False, format=fmt, error=f"{message}\n{detail}" if detail else message)

    return RenderResult(success=True, format=fmt, output=result.stdout)


def make_error_block(code: str, error: str) -> dict[str, Any]:
    """Create the code block shown when rendering fails."""
    return code_block(
        f"ERROR rendering PlantUML:\n{error}\n\nOriginal code:\n{code}",
        Attr(classes=("plantuml-error",)),
    )


def make_output_node(rendered: RenderResult) -> dict[str, Any]:
    """Turn successful output into a code block (text formats) or an embedded image."""
    if rendered.is_text:
        return code_block(rendered.output.decode("utf-8", errors="replace"), Attr(classes=("plantuml-output",)))

    mime_type = PLANTUML_MIME_TYPES.get(rendered.format, PLANTUML_MIME_TYPES[DEFAULT_PLANTUML_FORMAT])
    encoded = base64.b64encode(rendered.output).decode("ascii")
    return para([image(f"data:{mime_type};base64,{encoded}", Attr(classes=("plantuml",)))])


class PlantUmlFilter(CodeBlockFilter):
    """Filter rendering ``plantuml`` code blocks.

    Parameters
    ----------
    executable : str, default "plantuml"
        PlantUML binary name or path
    default_format : str, default "svg"
        Format for blocks without a ``format`` attribute

    """

    name = "plantuml"
    classes = PLANTUML_CLASSES

    def __init__(self, executable: str = DEFAULT_PLANTUML_EXECUTABLE, default_format: str = DEFAULT_PLANTUML_FORMAT):
        """Initialize the filter with the renderer to call."""
        self.executable = executable
        self.default_format = normalize_format(default_format)

    def transform_block(self, block: CodeBlock) -> Any:
        fmt = normalize_format(block.attr.get(PLANTUML_FORMAT_ATTR) or self.default_format)
        rendered = render_plantuml(block.text, fmt, self.executable)
        if not rendered.success:
            logger.warning(f"PlantUML rendering failed: {rendered.error}")
            return make_error_block(block.text, rendered.error or "unknown error")
        return make_output_node(rendered)
