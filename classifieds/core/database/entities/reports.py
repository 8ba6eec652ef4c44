"""Listing report entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Report(Base, table=True):
    """Abuse report filed by a user against a listing.

    Table: reports
    """

    __tablename__ = "reports"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    listing_id: str = Field(foreign_key="listings.id", ondelete="CASCADE", index=True, max_length=36)
    reported_by: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=36)
    reason: str = Field(max_length=100)
    description: Optional[str] = Field(default=None)
    status: str = Field(default="pending", max_length=20, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
