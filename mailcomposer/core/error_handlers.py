"""Centralized error reporting for the command-line entry point."""
from __future__ import annotations

import logging

from mailcomposer.core.errors import MailComposerError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _flatten_detail(exc: BaseException) -> str:
    return str(exc) or "An error occurred"


def describe_error(exc: BaseException) -> str:
    """Return the human readable line reported for a failed run."""
    if isinstance(exc, MailComposerError):
        return _flatten_detail(exc)
    return f"Email sending failed: {str(exc) or type(exc).__name__}"


def handle_error(exc: BaseException) -> int:
    """Log ``exc`` the way its kind deserves and return the process exit code."""
    message = describe_error(exc)
    if isinstance(exc, MailComposerError):
        logger.error("%s", message)
    else:
        logger.exception("Unhandled error while sending email: %s", message)
    return EXIT_FAILURE


__all__ = ["EXIT_OK", "EXIT_FAILURE", "describe_error", "handle_error"]
