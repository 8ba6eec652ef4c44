"""
Repository foundations.

``TableRepository`` fixes the CRUD surface every marketplace table exposes,
``SqlRepository`` implements it on an async SQLModel session, and
``QueryBuilder`` holds the statement helpers shared by the domain queries
(equality filters that skip unset values, pagination, multi-column search).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

EntityType = TypeVar("EntityType", bound=SQLModel)


class TableRepository(ABC, Generic[EntityType]):
    """CRUD contract for one table, keyed by string ids."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Insert ``entity`` and return it with database defaults loaded."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        """Row with this primary key, or None."""

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Persist changes made to a loaded ``entity``."""

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Remove a row; False when it did not exist."""

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """Rows matching the equality ``filters``, one page at a time.

        Args:
            limit: Page size; no limit when None or 0
            offset: Rows to skip
            filters: Column name to required value; None values are ignored
        """


class SqlRepository(TableRepository[EntityType]):
    """CRUD implementation shared by every table repository.

    Subclasses set ``model`` and add their domain queries. Every write
    commits before returning.
    """

    model: Type[EntityType]

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, self.model)

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def get_many(self, ids: Iterable[str]) -> List[EntityType]:
        """Fetch every row whose primary key is in ``ids``."""
        ids = list(set(ids))
        if not ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: str) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def delete_where(self, *conditions) -> int:
        """Bulk delete rows matching ``conditions`` and return how many went."""
        result = await self.session.execute(sa_delete(self.model).where(*conditions))
        await self.session.commit()
        return result.rowcount or 0

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, *conditions) -> int:
        """Count rows matching ``conditions`` (all rows when none are given)."""
        stmt = select(func.count()).select_from(self.model)
        if conditions:
            stmt = stmt.where(*conditions)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def _paginate(self, stmt, limit: Optional[int], offset: int) -> tuple[List[EntityType], int]:
        """Run ``stmt`` for one page and count the unpaginated result."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int((await self.session.execute(count_stmt)).scalar_one())
        result = await self.session.execute(QueryBuilder.apply_pagination(stmt, limit, offset))
        return list(result.scalars().all()), total


class QueryBuilder:
    """Statement helpers shared by the table repositories."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Add ``column == value`` clauses for every set value in ``filters``.

        Unknown column names and None values are skipped, so optional query
        parameters can be passed straight through.
        """
        for column, value in filters.items():
            if value is None or not hasattr(model, column):
                continue
            stmt = stmt.where(getattr(model, column) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Limit and offset ``stmt``; falsy values leave it unbounded."""
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        return stmt

    @staticmethod
    def ilike_any(columns: Sequence, term: str):
        """Case-insensitive ``contains`` over several columns, OR-ed together."""
        pattern = f"%{term}%"
        return or_(*(column.ilike(pattern) for column in columns))
