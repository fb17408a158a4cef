"""Expand ``{PLACEHOLDER}`` tokens inside user supplied HTML templates."""

from __future__ import annotations

import html
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

from mailcomposer.core.config import settings
from mailcomposer.core.errors import MailComposerError
from mailcomposer.models import EmailConfiguration, InlineResource
from mailcomposer.models.email import attachment_filename
from mailcomposer.repository.text_loader import load_text

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"\{([A-Z_]+)\}")

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = f"{DATE_FORMAT} {TIME_FORMAT}"

RegisterInlineResource = Callable[[InlineResource], None]
RecordFallback = Callable[[str], None]


def generate_content_id(prefix: str = "logo") -> str:
    return f"{prefix}_{uuid.uuid4().hex}@{settings.CONTENT_ID_DOMAIN}"


def logo_available(path: str, on_fallback: Optional[RecordFallback] = None) -> bool:
    """Whether the logo file exists; a missing one is logged and reported."""
    if Path(path).is_file():
        return True
    event = f"Logo not found: {path}"
    logger.warning("%s, sending without it", event)
    if on_fallback is not None:
        on_fallback(event)
    return False


def escape_message(text: str) -> str:
    """HTML-escape ``text`` and turn its line breaks into ``<br>`` tags."""
    escaped = html.escape(text.replace("\r\n", "\n"), quote=True)
    return escaped.replace("\n", "<br>")


def load_signature(path: Optional[str]) -> str:
    """Signature file content, or an empty string when it cannot be read."""
    if not path:
        return ""
    try:
        signature = load_text(path)
    except (MailComposerError, OSError) as exc:
        logger.warning("Failed to load signature file %s: %s", path, exc)
        return ""
    logger.info("Loaded signature from: %s", path)
    return signature


class PlaceholderValues:
    """Lazily resolved values for every recognised placeholder.

    The signature file is only read, and the logo only registered, when the
    template actually references them. One timestamp serves the whole run.
    """

    def __init__(
        self,
        config: EmailConfiguration,
        register_inline_resource: RegisterInlineResource,
        *,
        body: Optional[str] = None,
        now: Optional[datetime] = None,
        on_fallback: Optional[RecordFallback] = None,
    ):
        self._config = config
        self._register = register_inline_resource
        self._on_fallback = on_fallback
        self._body = config.body if body is None else body
        self._now = now or datetime.now()
        self._cache: Dict[str, str] = {}
        self._resolvers: Dict[str, Callable[[], str]] = {
            "USER_MESSAGE": lambda: escape_message(self._body),
            "TEAM_NAME": lambda: config.team_name or "",
            "FROM": lambda: config.sender or "",
            "SENDER_EMAIL": lambda: config.sender or "",
            "TO": lambda: ", ".join(config.to),
            "REPLY_TO": lambda: config.reply_to or "",
            "SUBJECT": lambda: config.subject or "",
            "USER_EMAIL": lambda: config.user or "",
            "SMTP_SERVER": lambda: config.smtp_server or "",
            "ATTACHMENT_NAME": self._attachment_name,
            "LOGO": self._logo,
            "SIGNATURE": lambda: load_signature(config.signature_file),
            "DATE": lambda: self._now.strftime(DATE_FORMAT),
            "TIME": lambda: self._now.strftime(TIME_FORMAT),
            "DATETIME": lambda: self._now.strftime(DATETIME_FORMAT),
        }

    def _attachment_name(self) -> str:
        if self._config.attachment_name:
            return self._config.attachment_name
        attachments = self._config.effective_attachments()
        return attachment_filename(attachments[0]) if attachments else ""

    def _logo(self) -> str:
        logo_path = self._config.logo_path
        if not logo_path or not logo_available(logo_path, self._on_fallback):
            return ""
        content_id = generate_content_id()
        self._register(InlineResource(content_id=content_id, path=logo_path))
        return f"cid:{content_id}"

    def get(self, name: str) -> Optional[str]:
        if name not in self._resolvers:
            return None
        if name not in self._cache:
            self._cache[name] = self._resolvers[name]()
        return self._cache[name]


def expand_template(
    template: str,
    config: EmailConfiguration,
    register_inline_resource: RegisterInlineResource,
    *,
    body: Optional[str] = None,
    now: Optional[datetime] = None,
    on_fallback: Optional[RecordFallback] = None,
) -> str:
    """Substitute every known ``{NAME}`` token in a single pass.

    Substituted text is not scanned again, so values that happen to contain
    placeholder syntax come out literally. Unknown tokens are kept as is. A
    missing logo file makes ``{LOGO}`` empty and is reported through
    ``on_fallback``.
    """
    values = PlaceholderValues(
        config, register_inline_resource, body=body, now=now, on_fallback=on_fallback
    )

    def substitute(match: "re.Match[str]") -> str:
        value = values.get(match.group(1))
        return match.group(0) if value is None else value

    return _TOKEN.sub(substitute, template)


__all__ = [
    "expand_template",
    "generate_content_id",
    "escape_message",
    "load_signature",
    "logo_available",
    "PlaceholderValues",
]
