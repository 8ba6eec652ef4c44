"""
Listing and category I/O models for API requests and responses.

Create/update fields are optional at the schema level: the listing form's
required fields are checked by the handler so a missing value produces the
marketplace's French message.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import ListingCondition
from .profiles import ProfileSummary


class CategoryRead(BaseModel):
    """Schema for reading a category."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    icon: Optional[str] = None
    description: Optional[str] = None


class ListingCreate(BaseModel):
    """Schema for the listing form."""

    title: Optional[str] = Field(default=None, max_length=200, examples=["Vélo de course"])
    description: Optional[str] = Field(default=None, examples=["Très bon état, peu servi."])
    category_id: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, examples=[250.0])
    location_city: Optional[str] = Field(default=None, max_length=120, examples=["Lyon"])
    condition: Optional[ListingCondition] = None
    images: List[str] = Field(default_factory=list, description="URLs returned by the image upload")


class ListingUpdate(ListingCreate):
    """Schema for editing a listing; same form as creation."""


class ListingRead(BaseModel):
    """Schema for reading a listing."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str
    category_id: str
    price: Optional[float] = None
    currency: str
    location_city: str
    condition: str
    images: List[str] = Field(default_factory=list)
    status: str
    views_count: int
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None


class ListingDetailRead(ListingRead):
    """Listing with its category and seller profile."""

    category: Optional[CategoryRead] = None
    seller_profile: Optional[ProfileSummary] = None


class ListingSummary(BaseModel):
    """Short listing reference embedded in messages and reviews."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    images: List[str] = Field(default_factory=list)


class ListingSearchResult(BaseModel):
    """One page of search results."""

    listings: List[ListingDetailRead]
    count: int = Field(description="Total number of matching listings")
    pages: int = Field(description="Number of pages for the requested page size")


class ImageUploadRead(BaseModel):
    """Stored image location."""

    path: str = Field(description="Storage path, <user_id>/<epoch_ms>-<random>.<ext>")
    url: str = Field(description="Public URL to put in the listing's images")


class BulkDeleteRequest(BaseModel):
    """Body of the bulk delete endpoint."""

    listingIds: Optional[List[str]] = None


class BulkDeleteResult(BaseModel):
    success: bool = True
    deletedCount: int


class ExpireResult(BaseModel):
    expired: int
