"""
Seller verification request entity.

Sellers submit their business details and document links; an admin
approves or rejects the request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class VerificationRequestBase(Base):
    """Fields submitted by the seller."""

    business_name: str = Field(max_length=255)
    business_type: Optional[str] = Field(default=None, max_length=100)
    business_registration: Optional[str] = Field(default=None, max_length=100)
    phone: str = Field(max_length=50)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None, max_length=120)
    id_document_url: Optional[str] = Field(default=None)
    business_document_url: Optional[str] = Field(default=None)
    proof_of_address_url: Optional[str] = Field(default=None)
    message: Optional[str] = Field(default=None)


class VerificationRequest(VerificationRequestBase, table=True):
    """Verification request and its review outcome.

    Table: verification_requests
    """

    __tablename__ = "verification_requests"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=36)

    status: str = Field(default="pending", max_length=20, index=True)
    reviewed_by: Optional[str] = Field(default=None, max_length=36)
    reviewed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    rejection_reason: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
