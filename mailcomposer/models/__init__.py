"""Domain models for the mail composer."""

from mailcomposer.models.email import (
    AssembledMessage,
    BodyContext,
    BodyStrategy,
    EmailConfiguration,
    InlineResource,
    MessagePart,
    PartRole,
)

__all__ = [
    "EmailConfiguration",
    "BodyStrategy",
    "BodyContext",
    "InlineResource",
    "MessagePart",
    "PartRole",
    "AssembledMessage",
]
