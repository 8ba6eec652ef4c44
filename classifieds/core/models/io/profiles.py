"""
Seller profile I/O models.

``SellerProfileRead`` is the full profile as stored; ``ProfileSummary`` is
the short form embedded in listings, reviews and admin log rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SellerProfileRead(BaseModel):
    """Schema for reading a seller profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    business_name: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    city: Optional[str] = None
    rating: float
    verified: bool
    role: str
    banned: bool
    banned_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    created_at: datetime


class ProfileSummary(BaseModel):
    """Public part of a profile embedded in other resources."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    business_name: Optional[str] = None
    avatar_url: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    rating: float = 5.0
    verified: bool = False


class SellerProfileUpdate(BaseModel):
    """Schema for the seller profile form."""

    business_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    whatsapp: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=120)


class UserInfoRead(BaseModel):
    """Display name and avatar of a message counterpart."""

    business_name: str
    avatar_url: Optional[str] = None
