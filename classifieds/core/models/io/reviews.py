"""Review I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """Schema for leaving a review on a seller."""

    seller_id: str
    listing_id: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=200)
    comment: str = Field(min_length=1)


class ReviewUpdate(BaseModel):
    """Schema for editing one's own review."""

    rating: Optional[int] = Field(default=None, ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=200)
    comment: Optional[str] = None


class ReviewerSummary(BaseModel):
    business_name: Optional[str] = None
    verified: bool = False


class ReviewRead(BaseModel):
    """Schema for reading a review."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    seller_id: str
    reviewer_id: str
    listing_id: Optional[str] = None
    rating: int
    title: Optional[str] = None
    comment: str
    created_at: datetime
    updated_at: datetime


class ReviewDetailRead(ReviewRead):
    """Review with the reviewer's and seller's public names and the listing title."""

    reviewer_profile: Optional[ReviewerSummary] = None
    seller_profile: Optional[ReviewerSummary] = None
    listing_title: Optional[str] = None


class ReviewStatsRead(BaseModel):
    """Aggregate rating of a seller."""

    total_reviews: int
    average_rating: str = Field(description="One decimal, '5.0' when there are no reviews")
    rating_distribution: Dict[int, int] = Field(description="Count per rating, keys 5 to 1")


class CanReviewRead(BaseModel):
    can_review: bool
    reason: Optional[str] = Field(default=None, description="not_authenticated, self_review or already_reviewed")
