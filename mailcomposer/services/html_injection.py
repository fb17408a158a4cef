"""Insert HTML fragments before the closing ``</body>`` tag."""

from __future__ import annotations

import re
from typing import Optional

_BODY_CLOSE = "</body>"
_BODY_OPEN = re.compile(r"<body[^>]*>", re.IGNORECASE)


def inject_before_body_close(html: str, fragment: str, marker: Optional[str] = None) -> str:
    """Put ``fragment`` before the last ``</body>``, or at the end if there is none.

    When ``marker`` is given and already present in ``html`` the input is
    returned unchanged, which makes repeated calls safe.
    """
    if marker is not None and marker in html:
        return html
    index = html.lower().rfind(_BODY_CLOSE)
    if index == -1:
        return html + fragment
    return html[:index] + fragment + html[index:]


def inject_after_body_open(html: str, fragment: str) -> str:
    """Put ``fragment`` right after the first opening ``<body ...>`` tag."""
    match = _BODY_OPEN.search(html)
    if match is None:
        return fragment + html
    return html[: match.end()] + fragment + html[match.end():]


def looks_like_html(text: str) -> bool:
    lowered = text.lower()
    return "<html>" in lowered or "<!doctype" in lowered


__all__ = ["inject_before_body_close", "inject_after_body_open", "looks_like_html"]
