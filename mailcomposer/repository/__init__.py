"""Repositories for the mail composer: files on disk and the SMTP server."""

from mailcomposer.repository.smtp_transport import MailTransport, SmtpTransport
from mailcomposer.repository.text_loader import (
    DEFAULT_ENCODINGS,
    correct_bidi,
    load_text,
    read_decoded,
)

__all__ = [
    "MailTransport",
    "SmtpTransport",
    "DEFAULT_ENCODINGS",
    "correct_bidi",
    "load_text",
    "read_decoded",
]
