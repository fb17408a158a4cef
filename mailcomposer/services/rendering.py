"""Jinja2 environment for the HTML fragments the composer generates itself."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from mailcomposer.core.config import settings

TEMPLATES_PATH = Path(__file__).resolve().parent.parent / "templates"


@lru_cache()
def get_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_PATH),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_fragment(template_name: str, **context: Any) -> str:
    context.setdefault("font_family", settings.FONT_FAMILY)
    context.setdefault("logo_max_width", settings.LOGO_MAX_WIDTH)
    return get_environment().get_template(template_name).render(**context)


__all__ = ["render_fragment", "get_environment", "TEMPLATES_PATH"]
