"""Configuration for the mail composer."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _to_bool(value: str, *, default: bool = False) -> bool:
    lowered = value.strip().lower()
    if not lowered:
        return default
    return lowered in {"true", "1", "yes", "y", "on"}


class Settings:
    PROJECT_NAME: str = os.getenv("MAILCOMPOSER_PROJECT_NAME", "Mail Composer")

    # Branding line appended once to every outgoing body.
    FOOTER_TEXT: str = os.getenv(
        "MAILCOMPOSER_FOOTER_TEXT",
        "Sent automatically by Mail Composer",
    )

    SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", "30"))
    SMTP_SSL_PORT: int = int(os.getenv("SMTP_SSL_PORT", "465"))

    LOG_LEVEL: str = os.getenv("MAILCOMPOSER_LOG_LEVEL", "INFO")

    FONT_FAMILY: str = os.getenv("MAILCOMPOSER_FONT_FAMILY", "Arial, sans-serif")
    LOGO_MAX_WIDTH: str = os.getenv("MAILCOMPOSER_LOGO_MAX_WIDTH", "200px")
    CONTENT_ID_DOMAIN: str = os.getenv("MAILCOMPOSER_CONTENT_ID_DOMAIN", "mailcomposer")

    # Parameter files and companions are removed after a successful send
    # unless the file itself sets debug=true.
    CLEANUP_AFTER_SEND: bool = _to_bool(
        os.getenv("MAILCOMPOSER_CLEANUP_AFTER_SEND", "true"), default=True
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

__all__ = ["settings", "get_settings", "Settings"]
