"""Error hierarchy shared by the composition pipeline."""

from __future__ import annotations

from typing import Iterable, Optional


class MailComposerError(Exception):
    """Base class for every error raised by the mail composer."""


class NotFoundError(MailComposerError):
    """A required or optional input file does not exist."""

    def __init__(self, path: str, what: str = "File"):
        super().__init__(f"{what} not found: {path}")
        self.path = path


class DecodingError(MailComposerError):
    """None of the candidate encodings could decode a file."""

    def __init__(self, path: str, encodings: Iterable[str]):
        self.path = path
        self.encodings = tuple(encodings)
        super().__init__(
            f"Unable to decode {path} with any of: {', '.join(self.encodings)}"
        )


class ParseError(MailComposerError):
    """A parameter file value has the wrong shape."""

    def __init__(self, key: str, value: str, reason: Optional[str] = None):
        self.key = key
        self.value = value
        message = f"Invalid value for '{key}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValidationError(MailComposerError):
    """Required configuration fields are missing."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "Invalid email configuration: " + ", ".join(self.missing)
        )


class TransportError(MailComposerError):
    """The transport collaborator failed to deliver the message."""


__all__ = [
    "MailComposerError",
    "NotFoundError",
    "DecodingError",
    "ParseError",
    "ValidationError",
    "TransportError",
]
