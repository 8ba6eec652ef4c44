"""
User account repository.

Lookups by email for authentication and the cascading account removal used
by the admin user management screen.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy import or_, select

from ..base import utc_now
from ..entities.favorites import Favorite
from ..entities.listings import Listing
from ..entities.messages import Message
from ..entities.notification_preferences import NotificationPreferences
from ..entities.reports import Report
from ..entities.reviews import Review
from ..entities.seller_profiles import SellerProfile
from ..entities.users import User
from ..entities.verification_requests import VerificationRequest
from .base import SqlRepository


class UserRepository(SqlRepository[User]):
    """Repository for user accounts."""

    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by its (already normalised) email."""
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def record_sign_in(self, user: User) -> User:
        user.last_sign_in_at = utc_now()
        return await self.update(user)

    async def emails_by_id(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Map user ids to emails for the given ids."""
        return {user.id: user.email for user in await self.get_many(user_ids)}

    async def delete_account(self, user_id: str) -> bool:
        """Delete a user and every row that belongs to them.

        Rows are removed child-first so the delete also works on databases
        that do not enforce ``ON DELETE CASCADE``.

        Args:
            user_id: Account to remove

        Returns:
            True if the account existed
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        listing_ids = select(Listing.id).where(Listing.user_id == user_id)
        for model, condition in (
            (Favorite, or_(Favorite.user_id == user_id, Favorite.listing_id.in_(listing_ids))),
            (Report, or_(Report.reported_by == user_id, Report.listing_id.in_(listing_ids))),
            (Message, or_(Message.sender_id == user_id, Message.receiver_id == user_id)),
            (Review, or_(Review.reviewer_id == user_id, Review.seller_id == user_id)),
            (VerificationRequest, VerificationRequest.user_id == user_id),
            (NotificationPreferences, NotificationPreferences.user_id == user_id),
            (Listing, Listing.user_id == user_id),
            (SellerProfile, SellerProfile.user_id == user_id),
        ):
            await self.session.execute(model.__table__.delete().where(condition))

        await self.session.delete(user)
        await self.session.commit()
        return True
