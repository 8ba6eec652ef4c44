"""
Listing entity.

A listing is a classified ad. It starts as a draft, becomes visible once
published, and expires ``listing_lifetime_days`` after publication.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class ListingBase(Base):
    """Fields a seller fills in on the listing form."""

    title: str = Field(max_length=200)
    description: str = Field()
    category_id: str = Field(foreign_key="categories.id", index=True, max_length=36)
    price: Optional[float] = Field(default=None, ge=0)
    currency: str = Field(default="EUR", max_length=3)
    location_city: str = Field(max_length=120, index=True)
    condition: str = Field(default="good", max_length=20)
    images: List[str] = Field(default_factory=list, sa_type=JSON, description="Public image URLs")


class Listing(ListingBase, table=True):
    """Classified ad.

    Table: listings
    """

    __tablename__ = "listings"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)

    status: str = Field(default="draft", max_length=20, index=True)
    views_count: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Listing(id={self.id}, title={self.title}, status={self.status})"
