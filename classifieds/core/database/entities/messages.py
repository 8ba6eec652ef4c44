"""Direct message entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Message(Base, table=True):
    """Message sent from one user to another, optionally about a listing.

    Table: messages
    """

    __tablename__ = "messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    sender_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)
    receiver_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)
    listing_id: Optional[str] = Field(default=None, foreign_key="listings.id", ondelete="SET NULL", max_length=36)
    message: str = Field()
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
