"""Listing report repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from ..entities.reports import Report
from .base import SqlRepository


class ReportRepository(SqlRepository[Report]):
    """Repository for listing reports."""

    model = Report

    async def list_by_status(self, status: Optional[str] = None) -> List[Report]:
        stmt = select(Report).order_by(Report.created_at.desc())
        if status:
            stmt = stmt.where(Report.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
