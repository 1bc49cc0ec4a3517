"""Markdown to HTML rendering for generated roadmaps.

Only three constructs are recognized: ``### `` headings, ``* `` bullets and
``**bold**`` spans inside bullets and paragraphs. Everything else becomes a
paragraph. Output is not escaped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

HEADING_MARKER = "### "
BULLET_MARKER = "* "

_BOLD_RE = re.compile(r"\*\*([^\n\r\u2028\u2029]*?)\*\*")


class LineKind(Enum):
    HEADING = "heading"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


class ListState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single line. Heading wins over bullet, bullet over paragraph."""
    if line.startswith(HEADING_MARKER):
        return ClassifiedLine(LineKind.HEADING, line[len(HEADING_MARKER):])
    if line.startswith(BULLET_MARKER):
        return ClassifiedLine(LineKind.BULLET, line[len(BULLET_MARKER):])
    return ClassifiedLine(LineKind.PARAGRAPH, line)


def apply_inline_bold(text: str) -> str:
    """Wrap every ``**...**`` span in ``<strong>``; single asterisks are left alone."""
    return _BOLD_RE.sub(r"<strong>\1</strong>", text)


def _render_line(state: ListState, line: ClassifiedLine) -> Tuple[ListState, List[str]]:
    fragments: List[str] = []

    if line.kind is LineKind.BULLET:
        if state is ListState.OUTSIDE:
            fragments.append("<ul>")
        fragments.append(f"<li>{apply_inline_bold(line.text)}</li>")
        return ListState.INSIDE, fragments

    if state is ListState.INSIDE:
        fragments.append("</ul>")

    if line.kind is LineKind.HEADING:
        fragments.append(f"<h3>{line.text}</h3>")
    else:
        fragments.append(f"<p>{apply_inline_bold(line.text)}</p>")
    return ListState.OUTSIDE, fragments


def render_markdown_to_html(text: str) -> str:
    """Render roadmap Markdown to an HTML fragment string.

    Lines are split on ``"\\n"`` only, so an empty string renders as a single
    empty paragraph. Consecutive bullets share one ``<ul>`` and any list still
    open at the end of input is closed.
    """
    output: List[str] = []
    state = ListState.OUTSIDE

    for raw_line in text.split("\n"):
        state, fragments = _render_line(state, classify_line(raw_line))
        output.extend(fragments)

    if state is ListState.INSIDE:
        output.append("</ul>")
    return "".join(output)
