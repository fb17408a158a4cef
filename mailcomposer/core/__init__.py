"""Core utilities for the mail composer."""

from mailcomposer.core.config import settings
from mailcomposer.core.error_handlers import describe_error, handle_error

__all__ = ["settings", "describe_error", "handle_error"]
