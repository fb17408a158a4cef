"""Append the branding footer to a generated body exactly once."""

from __future__ import annotations

from typing import Optional

from markupsafe import escape

from mailcomposer.core.config import settings
from mailcomposer.models import BodyContext
from mailcomposer.services.html_injection import inject_before_body_close
from mailcomposer.services.rendering import render_fragment


def apply_footer(body: str, is_html: bool, footer_text: Optional[str] = None) -> str:
    text = footer_text or settings.FOOTER_TEXT
    if text in body:
        return body
    if is_html:
        fragment = render_fragment("footer.html", footer_text=text)
        return inject_before_body_close(body, fragment, marker=str(escape(text)))
    return f"{body}\n\n{text}"


def inject_footer(context: BodyContext, footer_text: Optional[str] = None) -> BodyContext:
    """Add the footer to ``context`` in place and return it."""
    if context.footer_inserted:
        return context
    context.body = apply_footer(context.body, context.is_html, footer_text)
    context.footer_inserted = True
    return context


__all__ = ["apply_footer", "inject_footer"]
