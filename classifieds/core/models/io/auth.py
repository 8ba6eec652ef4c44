"""Authentication I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .profiles import SellerProfileRead


class SignupRequest(BaseModel):
    """Schema for creating an account.

    Email and password are optional here so a missing value yields the
    marketplace's own message rather than a schema error.
    """

    email: Optional[EmailStr] = Field(default=None, examples=["vendeur@example.fr"])
    password: Optional[str] = Field(default=None, examples=["motdepasse"])
    business_name: Optional[str] = Field(default=None, max_length=255, examples=["Boutique Dupont"])


class LoginRequest(BaseModel):
    """Schema for signing in."""

    email: Optional[str] = None
    password: Optional[str] = None


class VerifyEmailRequest(BaseModel):
    token: str


class UserRead(BaseModel):
    """Account fields safe to return to their owner."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    email_verified: bool
    created_at: datetime
    last_sign_in_at: Optional[datetime] = None


class CurrentUserRead(BaseModel):
    """The signed-in user with their seller profile."""

    user: UserRead
    profile: Optional[SellerProfileRead] = None


class SessionRead(CurrentUserRead):
    """Result of a successful login."""

    access_token: str
    token_type: str = "bearer"


class BanStatusRead(BaseModel):
    """What a banned user is shown on the suspension page."""

    banned: bool
    banned_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
