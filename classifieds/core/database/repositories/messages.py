"""Direct message repository."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, or_, select

from ..entities.messages import Message
from .base import SqlRepository


class MessageRepository(SqlRepository[Message]):
    """Repository for direct messages."""

    model = Message

    async def involving(self, user_id: str) -> List[Message]:
        """Every message sent or received by ``user_id``, newest first."""
        stmt = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def thread(self, user_id: str, other_user_id: str) -> List[Message]:
        """Messages exchanged between two users, oldest first."""
        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_thread_read(self, receiver_id: str, sender_id: str) -> List[Message]:
        """Mark unread messages from ``sender_id`` to ``receiver_id`` as read.

        Returns:
            The messages that changed
        """
        stmt = select(Message).where(
            Message.receiver_id == receiver_id,
            Message.sender_id == sender_id,
            Message.read.is_(False),
        )
        result = await self.session.execute(stmt)
        messages = list(result.scalars().all())
        for message in messages:
            message.read = True
            self.session.add(message)
        if messages:
            await self.session.commit()
        return messages

    async def unread_count(self, receiver_id: str) -> int:
        return await self.count(Message.receiver_id == receiver_id, Message.read.is_(False))

    async def created_since(self, since: datetime, until: Optional[datetime] = None) -> int:
        conditions = [Message.created_at >= since]
        if until is not None:
            conditions.append(Message.created_at < until)
        return await self.count(*conditions)
