"""Admin audit log repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from ..entities.admin_logs import AdminLog
from .base import SqlRepository


class AdminLogRepository(SqlRepository[AdminLog]):
    """Repository for the admin audit trail."""

    model = AdminLog

    async def record(
        self,
        admin_id: str,
        action: str,
        target_id: Optional[str],
        details: Optional[str] = None,
        target_type: Optional[str] = None,
    ) -> AdminLog:
        """Append one audit row."""
        return await self.create(
            AdminLog(admin_id=admin_id, action=action, target_id=target_id, target_type=target_type, details=details)
        )

    async def for_target(self, target_id: str, limit: int = 10) -> List[AdminLog]:
        """Most recent actions on one listing or user."""
        stmt = (
            select(AdminLog)
            .where(AdminLog.target_id == target_id)
            .order_by(AdminLog.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
