"""
Admin I/O models.

Covers moderation, user management, listing reports, the dashboard and the
analytics reports.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import ReportStatus, UserRole
from .listings import ListingDetailRead, ListingRead
from .profiles import SellerProfileRead

# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


class ModerationPage(BaseModel):
    """One page of the moderation table."""

    listings: List[ListingDetailRead]
    total: int
    pages: int
    current_page: int


class RejectListingRequest(BaseModel):
    reason: Optional[str] = None


class FlagListingRequest(BaseModel):
    reason: str = Field(min_length=1)
    details: Optional[str] = None


class AdminLogRead(BaseModel):
    """Audit row with the acting admin's business name."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    admin_id: str
    action: str
    target_id: Optional[str] = None
    target_type: Optional[str] = None
    details: Optional[str] = None
    created_at: datetime
    admin_name: Optional[str] = None


class ReportCreate(BaseModel):
    """Schema for reporting a listing."""

    reason: str = Field(min_length=1, max_length=100, examples=["Arnaque"])
    description: Optional[str] = None


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    listing_id: str
    reported_by: str
    reason: str
    description: Optional[str] = None
    status: str
    created_at: datetime


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class ManagedUserRead(SellerProfileRead):
    """Profile row of the admin user table, with the account email."""

    email: Optional[str] = None


class UserPage(BaseModel):
    users: List[ManagedUserRead]
    total: int
    pages: int
    current_page: int


class BanUserRequest(BaseModel):
    reason: str = Field(min_length=1)
    details: Optional[str] = None


class ChangeRoleRequest(BaseModel):
    role: UserRole


class ToggleVerifiedRequest(BaseModel):
    verified: bool


class UserStatsRead(BaseModel):
    listings_count: int
    published_count: int
    messages_sent: int
    messages_received: int
    favorites_count: int
    total_views: int


# ---------------------------------------------------------------------------
# Dashboard and reports
# ---------------------------------------------------------------------------


class DashboardStatsRead(BaseModel):
    total_users: int
    total_listings: int
    published_listings: int
    total_messages: int
    listings_today: int
    users_today: int


class RecentActivityRead(BaseModel):
    """Newest listings and newest seller profiles."""

    listings: List[ListingRead]
    users: List[SellerProfileRead]


class ActivityItem(BaseModel):
    """Entry of the merged admin activity feed."""

    id: str
    type: str = Field(description="listing or user")
    title: str
    description: str
    timestamp: datetime
    link: Optional[str] = None
    image: Optional[str] = None


class ChartPoint(BaseModel):
    date: str = Field(description="dd/mm/yyyy")
    count: int


class GrowthMetric(BaseModel):
    current: int
    previous: int
    growth: int = Field(description="Percentage change, rounded")


class GrowthMetricsRead(BaseModel):
    users: GrowthMetric
    listings: GrowthMetric
    messages: GrowthMetric


class DistributionEntry(BaseModel):
    name: str
    count: int


class TopSellerRead(BaseModel):
    user_id: str
    business_name: Optional[str] = None
    verified: bool = False
    rating: float = 5.0
    listings_count: int
    total_views: int


class PlatformOverviewRead(BaseModel):
    total_users: int
    total_listings: int
    published_listings: int
    total_messages: int
    total_views: int
    verified_sellers: int
    banned_users: int


class ExportStatsRead(BaseModel):
    users: int
    listings: int
    messages: int


class SellerAnalyticsRead(BaseModel):
    """Figures shown to a seller about their own listings."""

    total_listings: int
    published_listings: int
    draft_listings: int
    expired_listings: int
    total_views: int
    favorites_received: int
    messages_received: int
    listings_by_category: List[DistributionEntry]
