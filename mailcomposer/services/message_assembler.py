"""Build the ordered MIME parts of the outgoing message."""

from __future__ import annotations

import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from mailcomposer.models import (
    AssembledMessage,
    BodyContext,
    EmailConfiguration,
    InlineResource,
    MessagePart,
    PartRole,
)
from mailcomposer.models.email import attachment_filename

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _read_bytes(path: str) -> bytes:
    with Path(path).open("rb") as handle:
        return handle.read()


def guess_content_type(path: str) -> str:
    content_type, encoding = mimetypes.guess_type(attachment_filename(path))
    if content_type is None or encoding is not None:
        return DEFAULT_CONTENT_TYPE
    return content_type


def sniff_image_type(data: bytes) -> Optional[str]:
    """MIME type of ``data`` according to Pillow, or ``None`` if it is not an image."""
    try:
        with Image.open(BytesIO(data)) as image:
            return Image.MIME.get(image.format or "")
    except (UnidentifiedImageError, OSError, ValueError):
        return None


def build_body_part(context: BodyContext) -> MessagePart:
    content_type = "text/html" if context.is_html else "text/plain"
    return MessagePart(role=PartRole.BODY, content_type=content_type, payload=context.body)


def build_inline_part(resource: InlineResource) -> Optional[MessagePart]:
    try:
        data = _read_bytes(resource.path)
    except OSError as exc:
        logger.warning("Failed to embed inline image %s: %s", resource.path, exc)
        return None
    content_type = sniff_image_type(data) or guess_content_type(resource.path)
    if not content_type.startswith("image/"):
        logger.warning("Inline resource %s is not a recognised image", resource.path)
    return MessagePart(
        role=PartRole.INLINE,
        content_type=content_type,
        payload=data,
        filename=attachment_filename(resource.path),
        content_id=resource.content_id,
    )


def build_attachment_part(path: str) -> Optional[MessagePart]:
    try:
        data = _read_bytes(path)
    except OSError as exc:
        logger.warning("Failed to attach file: %s - %s", path, exc)
        return None
    filename = attachment_filename(path)
    logger.info("Added attachment: %s", filename)
    return MessagePart(
        role=PartRole.ATTACHMENT,
        content_type=guess_content_type(path),
        payload=data,
        filename=filename,
    )


def assemble_message(config: EmailConfiguration, context: BodyContext) -> AssembledMessage:
    """Body first, then inline images, then attachments.

    Unreadable inline images and attachments are skipped with a warning.
    """
    parts: List[MessagePart] = [build_body_part(context)]

    for resource in context.inline_resources:
        part = build_inline_part(resource)
        if part is not None:
            parts.append(part)

    for path in config.effective_attachments():
        part = build_attachment_part(path)
        if part is not None:
            parts.append(part)

    return AssembledMessage(
        sender=config.sender,
        to=tuple(config.to),
        bcc=tuple(config.bcc),
        subject=config.subject,
        reply_to=config.reply_to or None,
        read_receipt_to=config.sender if config.read_receipt else None,
        parts=tuple(parts),
    )


__all__ = [
    "assemble_message",
    "build_body_part",
    "build_inline_part",
    "build_attachment_part",
    "guess_content_type",
    "sniff_image_type",
]
