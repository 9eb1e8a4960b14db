"""Messaging result models."""

from pydantic import BaseModel


class SendResult(BaseModel):
    """Result of handing one message to a provider."""

    message_id: str | None = None
    status: str = "sent"
