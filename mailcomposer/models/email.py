"""Email related domain models."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import List, Optional, Sequence, Tuple, Union

from mailcomposer.core.errors import ValidationError


@dataclass(frozen=True)
class EmailConfiguration:
    """Everything a parameter file says about the message to send."""

    smtp_server: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    from_address: Optional[str] = None
    reply_to: Optional[str] = None
    to: Tuple[str, ...] = ()
    bcc: Tuple[str, ...] = ()
    subject: str = ""
    body: str = ""
    use_tls: bool = False
    use_html: bool = False
    read_receipt: bool = False
    debug: bool = False
    logo_path: Optional[str] = None
    signature_file: Optional[str] = None
    html_template: Optional[str] = None
    team_name: Optional[str] = None
    attachment_path: Optional[str] = None
    attachment_name: Optional[str] = None
    attachment_paths: Tuple[str, ...] = ()
    source_path: Optional[str] = None

    @property
    def sender(self) -> str:
        """Return the From address, falling back to the SMTP user."""
        return self.from_address or self.user

    def validation_errors(self) -> List[str]:
        errors: List[str] = []
        if not self.smtp_server:
            errors.append("SMTP server is missing")
        if self.port <= 0:
            errors.append("Port is invalid")
        if not self.user:
            errors.append("User is missing")
        if not self.password:
            errors.append("Password is missing")
        if not self.to:
            errors.append("Recipient email address is missing")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()

    def validate(self) -> None:
        """Raise :class:`ValidationError` listing every missing field."""
        errors = self.validation_errors()
        if errors:
            raise ValidationError(errors)

    def effective_attachments(self) -> Tuple[str, ...]:
        """Attachments to send: the ``.list`` entries win over the single path."""
        if self.attachment_paths:
            return self.attachment_paths
        if self.attachment_path:
            return (self.attachment_path,)
        return ()

    def __repr__(self) -> str:
        # Credentials stay out of logs.
        return (
            f"EmailConfiguration(to={','.join(self.to)!r}, "
            f"subject={self.subject!r}, attachment={self.attachment_name!r})"
        )


class BodyStrategy(str, enum.Enum):
    TEMPLATE = "template"
    DEFAULT_HTML = "default-html"
    PLAIN_TEXT = "plain-text"


@dataclass(frozen=True)
class InlineResource:
    """A file embedded in the message and referenced by ``cid:`` from the body."""

    content_id: str
    path: str


@dataclass
class BodyContext:
    """Body produced for one composition run, plus what it needs embedded."""

    strategy: BodyStrategy
    body: str
    inline_resources: List[InlineResource] = field(default_factory=list)
    footer_inserted: bool = False
    fallback_events: List[str] = field(default_factory=list)

    @property
    def is_html(self) -> bool:
        return self.strategy is not BodyStrategy.PLAIN_TEXT

    def register_inline_resource(self, resource: InlineResource) -> None:
        if all(item.content_id != resource.content_id for item in self.inline_resources):
            self.inline_resources.append(resource)


class PartRole(str, enum.Enum):
    BODY = "body"
    INLINE = "inline"
    ATTACHMENT = "attachment"


@dataclass(frozen=True)
class MessagePart:
    """One MIME part of the assembled message."""

    role: PartRole
    content_type: str
    payload: Union[str, bytes]
    filename: Optional[str] = None
    content_id: Optional[str] = None

    @property
    def disposition(self) -> Optional[str]:
        if self.role is PartRole.INLINE:
            return "inline"
        if self.role is PartRole.ATTACHMENT:
            return "attachment"
        return None


@dataclass(frozen=True)
class AssembledMessage:
    """Represents an email ready to be handed to a transport."""

    sender: str
    to: Sequence[str]
    subject: str
    parts: Sequence[MessagePart]
    bcc: Sequence[str] = field(default_factory=tuple)
    reply_to: Optional[str] = None
    read_receipt_to: Optional[str] = None

    @property
    def body_part(self) -> MessagePart:
        return self.parts[0]

    def parts_with_role(self, role: PartRole) -> List[MessagePart]:
        return [part for part in self.parts if part.role is role]

    def envelope_recipients(self) -> List[str]:
        return list(self.to) + list(self.bcc)

    def to_email_message(self) -> EmailMessage:
        """Render the parts into a MIME tree.

        The body and inline parts form a ``multipart/related`` block; any
        attachment wraps it in ``multipart/mixed``. Bcc stays off the headers.
        """
        message = EmailMessage()
        message["Subject"] = self.subject
        message["From"] = self.sender
        message["To"] = ", ".join(self.to)
        if self.reply_to:
            message["Reply-To"] = self.reply_to
        if self.read_receipt_to:
            message["Disposition-Notification-To"] = self.read_receipt_to

        body = self.body_part
        subtype = body.content_type.split("/", 1)[1]
        message.set_content(body.payload, subtype=subtype, charset="utf-8")

        for part in self.parts_with_role(PartRole.INLINE):
            maintype, subtype = part.content_type.split("/", 1)
            message.add_related(
                part.payload,
                maintype=maintype,
                subtype=subtype,
                cid=f"<{part.content_id}>",
                disposition="inline",
                filename=part.filename,
            )

        for part in self.parts_with_role(PartRole.ATTACHMENT):
            maintype, subtype = part.content_type.split("/", 1)
            message.add_attachment(
                part.payload,
                maintype=maintype,
                subtype=subtype,
                filename=part.filename,
            )

        return message


def attachment_filename(path: str) -> str:
    """Final path segment of ``path``, accepting both separator styles."""
    return os.path.basename(path.replace("\\", "/"))


__all__ = [
    "EmailConfiguration",
    "BodyStrategy",
    "InlineResource",
    "BodyContext",
    "PartRole",
    "MessagePart",
    "AssembledMessage",
    "attachment_filename",
]
