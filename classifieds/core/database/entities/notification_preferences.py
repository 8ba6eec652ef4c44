"""Notification preferences entity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class NotificationPreferencesBase(Base):
    """Email and in-app notification switches."""

    email_new_message: bool = True
    email_new_favorite: bool = True
    email_listing_approved: bool = True
    email_listing_rejected: bool = True
    email_new_review: bool = True
    email_verification_approved: bool = True
    email_marketing: bool = False
    app_new_message: bool = True
    app_new_favorite: bool = True
    app_listing_update: bool = True


class NotificationPreferences(NotificationPreferencesBase, table=True):
    """Per-user notification preferences, created with defaults on first read.

    Table: notification_preferences
    """

    __tablename__ = "notification_preferences"
    __table_args__ = ({"extend_existing": True},)

    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True, max_length=36)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
