"""High level orchestration: parameter file in, one delivered message out."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from mailcomposer.models import AssembledMessage, BodyContext, EmailConfiguration
from mailcomposer.repository.smtp_transport import MailTransport, SmtpTransport
from mailcomposer.repository.text_loader import PathLike
from mailcomposer.schemas import DeliveryOutcome
from mailcomposer.services.body_generator import generate_body
from mailcomposer.services.config_parser import parse_parameter_file
from mailcomposer.services.footer import inject_footer
from mailcomposer.services.message_assembler import assemble_message

logger = logging.getLogger(__name__)


class EmailService:
    """Compose messages from parameter files and deliver them."""

    def __init__(self, *, transport: MailTransport | None = None):
        self._transport = transport or SmtpTransport()

    @staticmethod
    def build_body(config: EmailConfiguration, *, now: Optional[datetime] = None) -> BodyContext:
        context = generate_body(config, now=now)
        return inject_footer(context)

    def compose(
        self, config: EmailConfiguration, *, now: Optional[datetime] = None
    ) -> tuple[AssembledMessage, BodyContext]:
        """Validate ``config`` and build the message without sending it."""
        config.validate()
        context = self.build_body(config, now=now)
        message = assemble_message(config, context)
        logger.info(
            "Composed %s message with %d part(s)", context.strategy.value, len(message.parts)
        )
        return message, context

    def send(self, config: EmailConfiguration, *, now: Optional[datetime] = None) -> DeliveryOutcome:
        message, context = self.compose(config, now=now)
        logger.info("Sending email to: %s", ",".join(config.to))
        if config.debug:
            logger.info("Debug mode is ON - files will be preserved")
        self._transport.send(message, config)
        return DeliveryOutcome.from_configuration(
            "SUCCESS",
            "Email sent successfully",
            config,
            body_strategy=context.strategy.value,
            fallback_events=list(context.fallback_events),
        )

    def send_parameter_file(self, path: PathLike) -> DeliveryOutcome:
        """Parse ``path`` and send the message it describes exactly once."""
        logger.info("Loading email configuration from: %s", path)
        return self.send(parse_parameter_file(path))


__all__ = ["EmailService"]
