"""Seller verification and notification preference I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VerificationRequestCreate(BaseModel):
    """Schema for the verification form.

    ``business_name`` and ``phone`` are required; they are checked by the
    handler so the error carries a French message.
    """

    business_name: Optional[str] = Field(default=None, max_length=255)
    business_type: Optional[str] = Field(default=None, max_length=100)
    business_registration: Optional[str] = Field(default=None, max_length=100, examples=["SIRET 123 456 789 00010"])
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=120)
    id_document_url: Optional[str] = None
    business_document_url: Optional[str] = None
    proof_of_address_url: Optional[str] = None
    message: Optional[str] = None


class VerificationRequestRead(BaseModel):
    """Schema for reading a verification request."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    business_name: str
    business_type: Optional[str] = None
    business_registration: Optional[str] = None
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    id_document_url: Optional[str] = None
    business_document_url: Optional[str] = None
    proof_of_address_url: Optional[str] = None
    message: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VerificationRequestAdminRead(VerificationRequestRead):
    """Verification request as listed for admins."""

    user_email: str = "N/A"


class RejectVerificationRequest(BaseModel):
    reason: str = Field(min_length=1)


class NotificationPreferencesRead(BaseModel):
    """Schema for reading notification preferences."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email_new_message: bool
    email_new_favorite: bool
    email_listing_approved: bool
    email_listing_rejected: bool
    email_new_review: bool
    email_verification_approved: bool
    email_marketing: bool
    app_new_message: bool
    app_new_favorite: bool
    app_listing_update: bool
    updated_at: datetime


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; omitted switches keep their value."""

    email_new_message: Optional[bool] = None
    email_new_favorite: Optional[bool] = None
    email_listing_approved: Optional[bool] = None
    email_listing_rejected: Optional[bool] = None
    email_new_review: Optional[bool] = None
    email_verification_approved: Optional[bool] = None
    email_marketing: Optional[bool] = None
    app_new_message: Optional[bool] = None
    app_new_favorite: Optional[bool] = None
    app_listing_update: Optional[bool] = None
