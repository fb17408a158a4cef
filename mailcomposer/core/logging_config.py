"""Logging setup for the command-line entry point."""

import logging
from typing import Optional

from mailcomposer.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%m/%d/%Y %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger."""
    resolved = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,
    )


__all__ = ["configure_logging"]
