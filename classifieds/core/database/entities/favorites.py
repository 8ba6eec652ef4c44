"""Favorite (saved listing) entity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Favorite(Base, table=True):
    """Listing saved by a user. A listing is saved at most once per user.

    Table: favorites
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "listing_id", name="uq_favorites_user_listing"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)
    listing_id: str = Field(foreign_key="listings.id", ondelete="CASCADE", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
