"""Seller verification request repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from ..entities.verification_requests import VerificationRequest
from .base import SqlRepository


class VerificationRequestRepository(SqlRepository[VerificationRequest]):
    """Repository for verification requests."""

    model = VerificationRequest

    async def pending_for_user(self, user_id: str) -> Optional[VerificationRequest]:
        stmt = select(VerificationRequest).where(
            VerificationRequest.user_id == user_id, VerificationRequest.status == "pending"
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def latest_for_user(self, user_id: str) -> Optional[VerificationRequest]:
        stmt = (
            select(VerificationRequest)
            .where(VerificationRequest.user_id == user_id)
            .order_by(VerificationRequest.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_status(self, status: Optional[str] = None) -> List[VerificationRequest]:
        """All requests, newest first, optionally with one status."""
        stmt = select(VerificationRequest).order_by(VerificationRequest.created_at.desc())
        if status:
            stmt = stmt.where(VerificationRequest.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
