"""
Listing repository.

Holds every listing query of the marketplace: public search, the seller's
own listings, the moderation table, expiry and the aggregates used by the
admin reports.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select, update

from ..base import utc_now
from ..entities.favorites import Favorite
from ..entities.listings import Listing
from ..entities.messages import Message
from ..entities.reports import Report
from ..entities.reviews import Review
from .base import QueryBuilder, SqlRepository

PUBLISHED = "published"


class ListingRepository(SqlRepository[Listing]):
    """Repository for listings."""

    model = Listing

    async def update(self, listing: Listing) -> Listing:
        listing.updated_at = utc_now()
        return await super().update(listing)

    async def search(
        self,
        *,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        city: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        condition: Optional[str] = None,
        sort_by: str = "recent",
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[Listing], int]:
        """Search published listings.

        Args:
            search: Case-insensitive fragment of the title or description
            category_id: Exact category
            city: Exact city
            min_price: Lowest accepted price
            max_price: Highest accepted price
            condition: Exact item condition
            sort_by: ``recent``, ``popular``, ``price_asc`` or ``price_desc``
            limit: Page size
            offset: Rows to skip

        Returns:
            The page of listings and the total number of matches
        """
        stmt = select(Listing).where(Listing.status == PUBLISHED)
        stmt = QueryBuilder.apply_filters(
            stmt, Listing, {"category_id": category_id, "location_city": city, "condition": condition}
        )
        if search:
            stmt = stmt.where(QueryBuilder.ilike_any([Listing.title, Listing.description], search))
        if min_price is not None:
            stmt = stmt.where(Listing.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Listing.price <= max_price)

        if sort_by == "popular":
            stmt = stmt.order_by(Listing.views_count.desc(), Listing.created_at.desc())
        elif sort_by == "price_asc":
            stmt = stmt.order_by(Listing.price.asc().nulls_last(), Listing.created_at.desc())
        elif sort_by == "price_desc":
            stmt = stmt.order_by(Listing.price.desc().nulls_last(), Listing.created_at.desc())
        else:
            stmt = stmt.order_by(Listing.created_at.desc())

        return await self._paginate(stmt, limit, offset)

    async def list_for_moderation(
        self,
        *,
        status: Optional[str] = None,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[Listing], int]:
        """Listings in any status for the moderation table, newest first."""
        stmt = select(Listing).order_by(Listing.created_at.desc())
        stmt = QueryBuilder.apply_filters(stmt, Listing, {"status": status, "category_id": category_id})
        if search:
            stmt = stmt.where(QueryBuilder.ilike_any([Listing.title, Listing.description], search))
        return await self._paginate(stmt, limit, offset)

    async def list_by_owner(self, user_id: str, status: Optional[str] = None, limit: Optional[int] = None) -> List[Listing]:
        """A seller's listings, newest first."""
        stmt = select(Listing).where(Listing.user_id == user_id).order_by(Listing.created_at.desc())
        stmt = QueryBuilder.apply_filters(stmt, Listing, {"status": status})
        stmt = QueryBuilder.apply_pagination(stmt, limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def recent(self, limit: int = 5) -> List[Listing]:
        stmt = select(Listing).order_by(Listing.created_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def published(self, limit: int) -> List[Listing]:
        """Published listings, most recently updated first."""
        stmt = select(Listing).where(Listing.status == PUBLISHED).order_by(Listing.updated_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def increment_views(self, listing_id: str) -> None:
        """Add one view to a listing in a single UPDATE."""
        stmt = update(Listing).where(Listing.id == listing_id).values(views_count=Listing.views_count + 1)
        await self.session.execute(stmt)
        await self.session.commit()

    async def expire_overdue(self, now: Optional[datetime] = None) -> int:
        """Mark published listings past their ``expires_at`` as expired.

        Returns:
            Number of listings expired
        """
        now = now or utc_now()
        stmt = (
            update(Listing)
            .where(Listing.status == PUBLISHED, Listing.expires_at.is_not(None), Listing.expires_at < now)
            .values(status="expired", updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def delete(self, listing_id: str) -> bool:
        return await self.delete_many([listing_id]) > 0

    async def delete_many(self, listing_ids: Sequence[str]) -> int:
        """Delete listings with their favorites and reports.

        Messages and reviews that referenced them keep existing without the
        listing link.

        Returns:
            Number of listings deleted
        """
        ids = list(listing_ids)
        if not ids:
            return 0
        await self.session.execute(sa_delete(Favorite).where(Favorite.listing_id.in_(ids)))
        await self.session.execute(sa_delete(Report).where(Report.listing_id.in_(ids)))
        await self.session.execute(update(Message).where(Message.listing_id.in_(ids)).values(listing_id=None))
        await self.session.execute(update(Review).where(Review.listing_id.in_(ids)).values(listing_id=None))
        return await self.delete_where(Listing.id.in_(ids))

    async def created_since(self, since: datetime, until: Optional[datetime] = None) -> int:
        conditions = [Listing.created_at >= since]
        if until is not None:
            conditions.append(Listing.created_at < until)
        return await self.count(*conditions)

    async def creation_dates_since(self, since: datetime) -> List[datetime]:
        stmt = select(Listing.created_at).where(Listing.created_at >= since)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def total_views(self, user_id: Optional[str] = None) -> int:
        stmt = select(func.coalesce(func.sum(Listing.views_count), 0))
        if user_id is not None:
            stmt = stmt.where(Listing.user_id == user_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by_status(self, user_id: Optional[str] = None) -> Dict[str, int]:
        """Number of listings per status, optionally for one seller."""
        stmt = select(Listing.status, func.count()).group_by(Listing.status)
        if user_id is not None:
            stmt = stmt.where(Listing.user_id == user_id)
        result = await self.session.execute(stmt)
        return {status: int(count) for status, count in result.all()}

    async def published_per_category(self, user_id: Optional[str] = None) -> List[tuple[str, int]]:
        """``(category_id, count)`` of published listings, largest first."""
        stmt = (
            select(Listing.category_id, func.count().label("n"))
            .where(Listing.status == PUBLISHED)
            .group_by(Listing.category_id)
            .order_by(func.count().desc())
        )
        if user_id is not None:
            stmt = stmt.where(Listing.user_id == user_id)
        result = await self.session.execute(stmt)
        return [(category_id, int(count)) for category_id, count in result.all()]

    async def published_per_city(self) -> List[tuple[Optional[str], int]]:
        """``(city, count)`` of published listings, largest first."""
        stmt = (
            select(Listing.location_city, func.count())
            .where(Listing.status == PUBLISHED)
            .group_by(Listing.location_city)
            .order_by(func.count().desc())
        )
        result = await self.session.execute(stmt)
        return [(city, int(count)) for city, count in result.all()]

    async def top_sellers(self, limit: int = 10) -> List[tuple[str, int, int]]:
        """``(user_id, published listings, total views)`` of the busiest sellers."""
        stmt = (
            select(Listing.user_id, func.count(), func.coalesce(func.sum(Listing.views_count), 0))
            .where(Listing.status == PUBLISHED)
            .group_by(Listing.user_id)
            .order_by(func.count().desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(user_id, int(count), int(views)) for user_id, count, views in result.all()]
