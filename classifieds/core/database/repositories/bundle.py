"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for easy injection into request handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .admin_logs import AdminLogRepository
from .categories import CategoryRepository
from .favorites import FavoriteRepository
from .listings import ListingRepository
from .messages import MessageRepository
from .notification_preferences import NotificationPreferencesRepository
from .reports import ReportRepository
from .reviews import ReviewRepository
from .seller_profiles import SellerProfileRepository
from .users import UserRepository
from .verification_requests import VerificationRequestRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    session: AsyncSession
    users: UserRepository
    profiles: SellerProfileRepository
    categories: CategoryRepository
    listings: ListingRepository
    messages: MessageRepository
    favorites: FavoriteRepository
    reviews: ReviewRepository
    verification_requests: VerificationRequestRepository
    admin_logs: AdminLogRepository
    reports: ReportRepository
    notification_preferences: NotificationPreferencesRepository


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        profiles=SellerProfileRepository(session),
        categories=CategoryRepository(session),
        listings=ListingRepository(session),
        messages=MessageRepository(session),
        favorites=FavoriteRepository(session),
        reviews=ReviewRepository(session),
        verification_requests=VerificationRequestRepository(session),
        admin_logs=AdminLogRepository(session),
        reports=ReportRepository(session),
        notification_preferences=NotificationPreferencesRepository(session),
    )
