"""Category repository."""

from __future__ import annotations

from typing import Dict, Iterable, List

from sqlalchemy import select

from ..entities.categories import Category
from .base import SqlRepository


class CategoryRepository(SqlRepository[Category]):
    """Repository for listing categories."""

    model = Category

    async def list_ordered(self) -> List[Category]:
        """All categories ordered by name."""
        result = await self.session.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def by_ids(self, ids: Iterable[str]) -> Dict[str, Category]:
        return {category.id: category for category in await self.get_many(ids)}
