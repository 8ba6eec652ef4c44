"""Admin audit log entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class AdminLog(Base, table=True):
    """One row per admin action, written after the action succeeded.

    Table: admin_logs
    """

    __tablename__ = "admin_logs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    admin_id: str = Field(index=True, max_length=36)
    action: str = Field(max_length=50, index=True, description="approve_listing, ban_user, ...")
    target_id: Optional[str] = Field(default=None, index=True, max_length=36)
    target_type: Optional[str] = Field(default=None, max_length=30, description="listing, user, verification")
    details: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
