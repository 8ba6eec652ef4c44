"""
Seller profile entity.

Every user owns exactly one seller profile. Besides the public business
details it carries the role, verification and ban flags that admin
routes read and write.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class SellerProfileBase(Base):
    """Public seller details editable by the owner."""

    business_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None, max_length=50)
    whatsapp: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=120)


class SellerProfile(SellerProfileBase, table=True):
    """Marketplace identity of a user.

    Table: seller_profiles
    """

    __tablename__ = "seller_profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", unique=True, index=True, max_length=36)

    rating: float = Field(default=5.0, description="Average review rating")
    verified: bool = Field(default=False, description="Seller identity checked by an admin")
    role: str = Field(default="user", max_length=20, description="user or admin")

    banned: bool = Field(default=False, index=True)
    banned_reason: Optional[str] = Field(default=None)
    banned_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    banned_by: Optional[str] = Field(default=None, max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"SellerProfile(user_id={self.user_id}, business_name={self.business_name}, role={self.role})"
