"""Seller review entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Review(Base, table=True):
    """Rating and comment left by a buyer on a seller.

    A reviewer may review a given seller once.

    Table: reviews
    """

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("reviewer_id", "seller_id", name="uq_reviews_reviewer_seller"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    seller_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)
    reviewer_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)
    listing_id: Optional[str] = Field(default=None, foreign_key="listings.id", ondelete="SET NULL", max_length=36)
    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=200)
    comment: str = Field()
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
