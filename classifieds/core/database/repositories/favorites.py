"""Favorite repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from ..entities.favorites import Favorite
from ..entities.listings import Listing
from .base import SqlRepository


class FavoriteRepository(SqlRepository[Favorite]):
    """Repository for saved listings."""

    model = Favorite

    async def get_for(self, user_id: str, listing_id: str) -> Optional[Favorite]:
        stmt = select(Favorite).where(Favorite.user_id == user_id, Favorite.listing_id == listing_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: str) -> List[Favorite]:
        """A user's favorites, most recently saved first."""
        stmt = select(Favorite).where(Favorite.user_id == user_id).order_by(Favorite.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def remove(self, user_id: str, listing_id: str) -> int:
        return await self.delete_where(Favorite.user_id == user_id, Favorite.listing_id == listing_id)

    async def count_received(self, seller_id: str) -> int:
        """How many times the seller's listings were saved."""
        owned = select(Listing.id).where(Listing.user_id == seller_id)
        return await self.count(Favorite.listing_id.in_(owned))
