"""Seller review repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from ..entities.reviews import Review
from .base import SqlRepository


class ReviewRepository(SqlRepository[Review]):
    """Repository for seller reviews."""

    model = Review

    async def get_for(self, reviewer_id: str, seller_id: str) -> Optional[Review]:
        stmt = select(Review).where(Review.reviewer_id == reviewer_id, Review.seller_id == seller_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_seller(self, seller_id: str, limit: int = 10, offset: int = 0) -> List[Review]:
        """A seller's reviews, newest first."""
        stmt = (
            select(Review)
            .where(Review.seller_id == seller_id)
            .order_by(Review.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def ratings_for_seller(self, seller_id: str) -> List[int]:
        result = await self.session.execute(select(Review.rating).where(Review.seller_id == seller_id))
        return [int(rating) for rating in result.scalars().all()]

    async def seller_ids_reviewed_by(self, reviewer_id: str) -> List[str]:
        result = await self.session.execute(
            select(Review.seller_id).where(Review.reviewer_id == reviewer_id).distinct()
        )
        return list(result.scalars().all())
