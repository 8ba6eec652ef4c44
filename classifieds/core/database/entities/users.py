"""
User account entity.

A user is the authentication identity: email and password hash. The public
marketplace identity (business name, role, ban flags) lives on the seller
profile, one per user.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class UserBase(Base):
    """Base fields for a user account."""

    email: str = Field(max_length=320, unique=True, index=True, description="Lower-cased login email")
    email_verified: bool = Field(default=False, description="Whether the email address was confirmed")


class User(UserBase, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    password_hash: str = Field(description="scrypt hash of the password")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
