"""Pydantic schemas used by the mail composer."""

from mailcomposer.schemas.outcome import DeliveryOutcome

__all__ = ["DeliveryOutcome"]
