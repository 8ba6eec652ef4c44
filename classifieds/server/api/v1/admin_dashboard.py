"""
Admin Dashboard Endpoints.

Headline counters, the recent activity panels and the listings-per-day chart.
"""

from typing import List

from fastapi import APIRouter, Query

from classifieds.core.models.io.admin import ActivityItem, ChartPoint, DashboardStatsRead, RecentActivityRead
from classifieds.core.models.io.listings import ListingRead
from classifieds.core.models.io.profiles import SellerProfileRead
from classifieds.server.services import analytics
from classifieds.server.services.deps import AdminDep, ReposDep

router = APIRouter()


@router.get(
    "/stats",
    response_model=DashboardStatsRead,
    summary="Dashboard Stats",
    description="Users, listings, published listings, messages, and listings and users created today.",
    responses={403: {"description": "Not an admin"}},
)
async def get_dashboard_stats(admin: AdminDep, repos: ReposDep) -> DashboardStatsRead:
    return await analytics.dashboard_stats(repos)


@router.get(
    "/recent-activity",
    response_model=RecentActivityRead,
    summary="Recent Activity",
    description="The 5 newest listings and the 5 newest seller profiles.",
)
async def get_recent_activity(admin: AdminDep, repos: ReposDep) -> RecentActivityRead:
    listings = await repos.listings.recent(5)
    profiles = await repos.profiles.recent(5)
    return RecentActivityRead(
        listings=[ListingRead.model_validate(listing) for listing in listings],
        users=[SellerProfileRead.model_validate(profile) for profile in profiles],
    )


@router.get(
    "/activity-feed",
    response_model=List[ActivityItem],
    summary="Activity Feed",
    description="New listings and sign-ups merged into one feed of 10 entries, newest first.",
)
async def get_activity_feed(admin: AdminDep, repos: ReposDep) -> List[ActivityItem]:
    return await analytics.activity_feed(repos)


@router.get(
    "/chart",
    response_model=List[ChartPoint],
    summary="Listings Per Day",
    description="Listings created per day over the last `days` days, dates as dd/mm/yyyy.",
)
async def get_chart_data(admin: AdminDep, repos: ReposDep, days: int = Query(default=7, ge=1, le=365)) -> List[ChartPoint]:
    return await analytics.chart_data(repos, days)
