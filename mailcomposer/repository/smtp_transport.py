"""Transport responsible for sending assembled messages through SMTP."""

from __future__ import annotations

import logging
import smtplib
from typing import Protocol

from mailcomposer.core.config import Settings, settings
from mailcomposer.core.errors import TransportError
from mailcomposer.models import AssembledMessage, EmailConfiguration

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    def send(self, message: AssembledMessage, config: EmailConfiguration) -> None:
        ...


class SmtpTransport:
    """Handles the low level communication with the SMTP server."""

    def __init__(self, config: Settings | None = None):
        self._settings = config or settings

    def _connect(self, config: EmailConfiguration) -> smtplib.SMTP:
        timeout = self._settings.SMTP_TIMEOUT
        if config.use_tls:
            logger.info("Using STARTTLS encryption on port %s", config.port)
            client = smtplib.SMTP(config.smtp_server, config.port, timeout=timeout)
            try:
                client.starttls()
            except BaseException:
                client.close()
                raise
            return client
        if config.port == self._settings.SMTP_SSL_PORT:
            logger.info("Using SSL encryption on port %s", config.port)
            return smtplib.SMTP_SSL(config.smtp_server, config.port, timeout=timeout)
        logger.info("No encryption enabled on port %s - cert=false", config.port)
        return smtplib.SMTP(config.smtp_server, config.port, timeout=timeout)

    def send(self, message: AssembledMessage, config: EmailConfiguration) -> None:
        mime = message.to_email_message()
        try:
            with self._connect(config) as client:
                client.login(config.user, config.password)
                client.send_message(
                    mime,
                    from_addr=message.sender,
                    to_addrs=message.envelope_recipients(),
                )
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportError(f"Failed to deliver email: {exc}") from exc
        logger.info("Email sent successfully via SMTP")


__all__ = ["MailTransport", "SmtpTransport"]
