"""Convert the small Markdown-like dialect used in ``.md`` bodies to HTML."""

from __future__ import annotations

import html
import re
from typing import List

_HEADING = re.compile(r"^(#{1,3}) (.+)$")
_BULLET = re.compile(r"^[*-] (.+)$")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_UNDERLINE = re.compile(r"__(.+?)__")
_BLANK_LINES = re.compile(r"\n[ \t]*\n")


def format_inline(text: str) -> str:
    # Bold first so that "**" is never read as two italic markers.
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    text = _ITALIC.sub(r"<em>\1</em>", text)
    return _UNDERLINE.sub(r"<u>\1</u>", text)


def _render_block(block: str) -> str:
    out: List[str] = []
    items: List[str] = []
    paragraph: List[str] = []

    def flush_items() -> None:
        if items:
            out.append("<ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul>")
            items.clear()

    def flush_paragraph() -> None:
        if paragraph:
            out.append("<p>" + "<br>".join(paragraph) + "</p>")
            paragraph.clear()

    for line in block.split("\n"):
        heading = _HEADING.match(line)
        if heading:
            flush_items()
            flush_paragraph()
            level = len(heading.group(1))
            out.append(f"<h{level}>{format_inline(heading.group(2))}</h{level}>")
            continue
        bullet = _BULLET.match(line)
        if bullet:
            flush_paragraph()
            items.append(format_inline(bullet.group(1)))
            continue
        flush_items()
        paragraph.append(format_inline(line))

    flush_items()
    flush_paragraph()
    return "".join(out)


def markdown_to_html(markdown: str) -> str:
    """Render ``markdown`` as an HTML fragment.

    Headings and bullet lists are recognised per line before the inline
    bold, italic and underline passes run, so list markers never turn into
    emphasis. Blank lines separate paragraphs; other line breaks become
    ``<br>``.
    """
    text = html.escape(markdown.replace("\r\n", "\n"), quote=False)
    blocks = [block for block in _BLANK_LINES.split(text.strip("\n")) if block.strip()]
    return "".join(_render_block(block) for block in blocks)


__all__ = ["markdown_to_html", "format_inline"]
