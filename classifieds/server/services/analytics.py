"""
Admin dashboard and report aggregates.

Counts come straight from the repositories; the few derived figures (growth
percentages, per-day buckets, the merged activity feed) are computed here.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import List

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.listings import Listing
from classifieds.core.database.entities.messages import Message
from classifieds.core.database.entities.seller_profiles import SellerProfile
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.models.io.admin import (
    ActivityItem,
    ChartPoint,
    DashboardStatsRead,
    DistributionEntry,
    GrowthMetric,
    GrowthMetricsRead,
    PlatformOverviewRead,
    SellerAnalyticsRead,
    TopSellerRead,
)
from classifieds.server.services.exports import format_fr_date

UNKNOWN_CITY = "Non spécifié"


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def growth_percent(current: int, previous: int) -> int:
    """Rounded percentage change; 0 when there is nothing to compare with."""
    if previous <= 0:
        return 0
    return round((current - previous) / previous * 100)


async def dashboard_stats(repos: RepoBundle) -> DashboardStatsRead:
    today = start_of_day(utc_now())
    return DashboardStatsRead(
        total_users=await repos.profiles.count(),
        total_listings=await repos.listings.count(),
        published_listings=await repos.listings.count(Listing.status == "published"),
        total_messages=await repos.messages.count(),
        listings_today=await repos.listings.created_since(today),
        users_today=await repos.profiles.created_since(today),
    )


async def chart_data(repos: RepoBundle, days: int = 7) -> List[ChartPoint]:
    """Listings created per day over the last ``days`` days, oldest first."""
    first_day = start_of_day(utc_now()) - timedelta(days=days - 1)
    per_day = Counter(created.date() for created in await repos.listings.creation_dates_since(first_day))
    points = []
    for offset in range(days):
        day = (first_day + timedelta(days=offset)).date()
        points.append(ChartPoint(date=format_fr_date(day), count=per_day.get(day, 0)))
    return points


async def activity_feed(repos: RepoBundle, limit: int = 10) -> List[ActivityItem]:
    """Newest listings and sign-ups merged into one feed, newest first."""
    items: List[ActivityItem] = []
    for listing in await repos.listings.recent(5):
        items.append(
            ActivityItem(
                id=f"listing-{listing.id}",
                type="listing",
                title=listing.title,
                description="Nouvelle annonce publiée",
                timestamp=listing.created_at,
                link=f"/listing/{listing.id}",
                image=listing.images[0] if listing.images else None,
            )
        )
    for profile in await repos.profiles.recent(5):
        items.append(
            ActivityItem(
                id=f"user-{profile.user_id}",
                type="user",
                title=profile.business_name or "Nouveau vendeur",
                description="Nouvel utilisateur inscrit",
                timestamp=profile.created_at,
            )
        )
    items.sort(key=lambda item: item.timestamp.replace(tzinfo=None), reverse=True)
    return items[:limit]


async def growth_metrics(repos: RepoBundle) -> GrowthMetricsRead:
    """Last 30 days against the 30 days before."""
    now = utc_now()
    recent_start = now - timedelta(days=30)
    previous_start = now - timedelta(days=60)

    def metric(current: int, previous: int) -> GrowthMetric:
        return GrowthMetric(current=current, previous=previous, growth=growth_percent(current, previous))

    return GrowthMetricsRead(
        users=metric(
            await repos.profiles.created_since(recent_start),
            await repos.profiles.created_since(previous_start, recent_start),
        ),
        listings=metric(
            await repos.listings.created_since(recent_start),
            await repos.listings.created_since(previous_start, recent_start),
        ),
        messages=metric(
            await repos.messages.created_since(recent_start),
            await repos.messages.created_since(previous_start, recent_start),
        ),
    )


async def category_distribution(repos: RepoBundle) -> List[DistributionEntry]:
    """Published listings per category, every category included, largest first."""
    counts = dict(await repos.listings.published_per_category())
    entries = [
        DistributionEntry(name=category.name, count=counts.get(category.id, 0))
        for category in await repos.categories.list_ordered()
    ]
    return sorted(entries, key=lambda entry: entry.count, reverse=True)


async def city_distribution(repos: RepoBundle, limit: int = 10) -> List[DistributionEntry]:
    """Top cities of published listings; blank cities are grouped together."""
    counts: Counter = Counter()
    for city, count in await repos.listings.published_per_city():
        counts[(city or "").strip() or UNKNOWN_CITY] += count
    return [DistributionEntry(name=name, count=count) for name, count in counts.most_common(limit)]


async def top_sellers(repos: RepoBundle, limit: int = 10) -> List[TopSellerRead]:
    rows = await repos.listings.top_sellers(limit)
    profiles = await repos.profiles.by_user_ids(user_id for user_id, _, _ in rows)
    sellers = []
    for user_id, listings_count, total_views in rows:
        profile = profiles.get(user_id)
        sellers.append(
            TopSellerRead(
                user_id=user_id,
                business_name=profile.business_name if profile else None,
                verified=profile.verified if profile else False,
                rating=profile.rating if profile else 5.0,
                listings_count=listings_count,
                total_views=total_views,
            )
        )
    return sellers


async def platform_overview(repos: RepoBundle) -> PlatformOverviewRead:
    return PlatformOverviewRead(
        total_users=await repos.profiles.count(),
        total_listings=await repos.listings.count(),
        published_listings=await repos.listings.count(Listing.status == "published"),
        total_messages=await repos.messages.count(),
        total_views=await repos.listings.total_views(),
        verified_sellers=await repos.profiles.count(SellerProfile.verified.is_(True)),
        banned_users=await repos.profiles.count(SellerProfile.banned.is_(True)),
    )


async def seller_analytics(repos: RepoBundle, seller_id: str) -> SellerAnalyticsRead:
    """Figures about one seller's own listings."""
    by_status = await repos.listings.count_by_status(seller_id)
    published = await repos.listings.published_per_category(seller_id)
    categories = await repos.categories.by_ids(category_id for category_id, _ in published)
    per_category = [
        DistributionEntry(name=categories[category_id].name if category_id in categories else category_id, count=count)
        for category_id, count in published
    ]
    return SellerAnalyticsRead(
        total_listings=sum(by_status.values()),
        published_listings=by_status.get("published", 0),
        draft_listings=by_status.get("draft", 0),
        expired_listings=by_status.get("expired", 0),
        total_views=await repos.listings.total_views(seller_id),
        favorites_received=await repos.favorites.count_received(seller_id),
        messages_received=await repos.messages.count(Message.receiver_id == seller_id),
        listings_by_category=per_category,
    )
