"""Outcome records handed to the logging and notification collaborators."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from mailcomposer.models import EmailConfiguration


class DeliveryOutcome(BaseModel):
    status: Literal["SUCCESS", "ERROR"]
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)
    to: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    subject: str = ""
    attachment_name: Optional[str] = None
    attachment_paths: List[str] = Field(default_factory=list)
    body_strategy: Optional[str] = None
    fallback_events: List[str] = Field(default_factory=list)

    @classmethod
    def from_configuration(
        cls,
        status: Literal["SUCCESS", "ERROR"],
        message: str,
        config: Optional[EmailConfiguration] = None,
        **extra,
    ) -> "DeliveryOutcome":
        if config is None:
            return cls(status=status, message=message, **extra)
        return cls(
            status=status,
            message=message,
            to=list(config.to),
            bcc=list(config.bcc),
            subject=config.subject,
            attachment_name=config.attachment_name,
            attachment_paths=list(config.effective_attachments()),
            **extra,
        )

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"


__all__ = ["DeliveryOutcome"]
