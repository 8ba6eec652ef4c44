"""Messaging I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .listings import ListingSummary


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    receiver_id: Optional[str] = None
    listing_id: Optional[str] = None
    message: Optional[str] = Field(default=None, examples=["Bonjour, est-ce toujours disponible ?"])


class MessageRead(BaseModel):
    """Schema for reading a message."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: str
    listing_id: Optional[str] = None
    message: str
    read: bool
    created_at: datetime


class ThreadMessageRead(MessageRead):
    """Message within a conversation, with the listing it is about."""

    listing: Optional[ListingSummary] = None


class ConversationRead(BaseModel):
    """Latest state of the exchange with one counterpart."""

    user_id: str = Field(description="Counterpart user id")
    user_email: str
    last_message: str
    last_message_date: datetime
    listing: Optional[ListingSummary] = None
    unread_count: int = 0


class MessageEvent(BaseModel):
    """Live update pushed on the message stream."""

    type: str = Field(description="INSERT or UPDATE")
    message: MessageRead
