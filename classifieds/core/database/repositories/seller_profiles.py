"""
Seller profile repository.

Profile lookups by user id, batch loading for listing/review details and the
filtered admin user table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select

from ..entities.seller_profiles import SellerProfile
from .base import QueryBuilder, SqlRepository


class SellerProfileRepository(SqlRepository[SellerProfile]):
    """Repository for seller profiles."""

    model = SellerProfile

    async def get_by_user_id(self, user_id: str) -> Optional[SellerProfile]:
        stmt = select(SellerProfile).where(SellerProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def by_user_ids(self, user_ids: Iterable[str]) -> Dict[str, SellerProfile]:
        """Map user ids to their profiles; users without one are left out."""
        user_ids = list(set(user_ids))
        if not user_ids:
            return {}
        stmt = select(SellerProfile).where(SellerProfile.user_id.in_(user_ids))
        result = await self.session.execute(stmt)
        return {profile.user_id: profile for profile in result.scalars().all()}

    async def search(
        self,
        *,
        search: Optional[str] = None,
        role: Optional[str] = None,
        banned: Optional[bool] = None,
        verified: Optional[bool] = None,
        limit: Optional[int] = 20,
        offset: int = 0,
    ) -> tuple[List[SellerProfile], int]:
        """Filter profiles for the admin user table, newest first.

        Args:
            search: Case-insensitive fragment of the business name
            role: Exact role
            banned: Ban flag
            verified: Verification flag
            limit: Page size
            offset: Rows to skip

        Returns:
            The page of profiles and the total number of matches
        """
        stmt = select(SellerProfile).order_by(SellerProfile.created_at.desc())
        stmt = QueryBuilder.apply_filters(stmt, SellerProfile, {"role": role, "banned": banned, "verified": verified})
        if search:
            stmt = stmt.where(SellerProfile.business_name.ilike(f"%{search}%"))
        return await self._paginate(stmt, limit, offset)

    async def recent(self, limit: int = 5) -> List[SellerProfile]:
        stmt = select(SellerProfile).order_by(SellerProfile.created_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def created_since(self, since: datetime, until: Optional[datetime] = None) -> int:
        conditions = [SellerProfile.created_at >= since]
        if until is not None:
            conditions.append(SellerProfile.created_at < until)
        return await self.count(*conditions)
