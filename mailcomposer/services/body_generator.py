"""Choose a body strategy and produce the body for one message."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from mailcomposer.core.errors import MailComposerError
from mailcomposer.models import BodyContext, BodyStrategy, EmailConfiguration, InlineResource
from mailcomposer.repository.text_loader import load_text
from mailcomposer.services.html_injection import (
    inject_after_body_open,
    inject_before_body_close,
    looks_like_html,
)
from mailcomposer.services.markdown import markdown_to_html
from mailcomposer.services.rendering import render_fragment
from mailcomposer.services.template_engine import (
    expand_template,
    generate_content_id,
    load_signature,
    logo_available,
)

logger = logging.getLogger(__name__)


def wants_html(config: EmailConfiguration) -> bool:
    return bool(config.use_html or config.logo_path or config.signature_file)


def _load_template(config: EmailConfiguration, context: BodyContext) -> Optional[str]:
    template_path = config.html_template
    if not template_path:
        return None
    if not Path(template_path).is_file():
        event = f"HTML template not found: {template_path}"
        logger.warning("%s, falling back to the default body", event)
        context.fallback_events.append(event)
        return None
    try:
        return load_text(template_path)
    except (MailComposerError, OSError) as exc:
        event = f"HTML template unreadable: {template_path} ({exc})"
        logger.warning("%s, falling back to the default body", event)
        context.fallback_events.append(event)
        return None


def _build_default_html(config: EmailConfiguration, context: BodyContext) -> str:
    body = config.body
    logo_cid = None
    if config.logo_path and logo_available(config.logo_path, context.fallback_events.append):
        logo_cid = generate_content_id()
        context.register_inline_resource(
            InlineResource(content_id=logo_cid, path=config.logo_path)
        )

    if looks_like_html(body):
        html_body = body
        if logo_cid:
            html_body = inject_after_body_open(
                html_body, render_fragment("logo.html", logo_cid=logo_cid)
            )
    else:
        html_body = render_fragment(
            "default_body.html",
            content=markdown_to_html(body),
            logo_cid=logo_cid,
        )

    signature = load_signature(config.signature_file)
    if signature:
        html_body = inject_before_body_close(html_body, signature)
    return html_body


def generate_body(config: EmailConfiguration, *, now: Optional[datetime] = None) -> BodyContext:
    """Produce the body using the first strategy that applies.

    1. a configured HTML template that exists on disk,
    2. default HTML when HTML, a logo or a signature is requested,
    3. the body as plain text.
    """
    context = BodyContext(strategy=BodyStrategy.PLAIN_TEXT, body=config.body)

    template = _load_template(config, context)
    if template is not None:
        logger.info("Using HTML template: %s", config.html_template)
        context.strategy = BodyStrategy.TEMPLATE
        context.body = expand_template(
            template,
            config,
            context.register_inline_resource,
            now=now,
            on_fallback=context.fallback_events.append,
        )
        return context

    if wants_html(config):
        context.strategy = BodyStrategy.DEFAULT_HTML
        context.body = _build_default_html(config, context)
        return context

    return context


__all__ = ["generate_body", "wants_html"]
