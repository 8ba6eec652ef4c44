"""
Admin User Management Endpoints.

Searching sellers, banning, role and verification changes, per-user stats
and account deletion. Every change writes an admin log row.
"""

import math
from typing import List, Optional

from fastapi import APIRouter, Query

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.favorites import Favorite
from classifieds.core.database.entities.messages import Message
from classifieds.core.database.entities.seller_profiles import SellerProfile
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.domain.enums import ListingStatus, UserRole
from classifieds.core.models.io.admin import (
    AdminLogRead,
    BanUserRequest,
    ChangeRoleRequest,
    ManagedUserRead,
    ToggleVerifiedRequest,
    UserPage,
    UserStatsRead,
)
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.listings import ListingRead
from classifieds.server.services.deps import AdminDep, ReposDep, StorageDep
from classifieds.server.services.moderation import log_admin_action, logs_with_admin_names
from classifieds.server.services.reviews import refresh_seller_rating

logger = get_logger(__name__)

router = APIRouter()

USERS_PAGE_SIZE = 20

BANNED_FILTERS = {"banned": True, "active": False}
VERIFIED_FILTERS = {"verified": True, "not_verified": False}


async def _get_profile(repos: RepoBundle, user_id: str) -> SellerProfile:
    profile = await repos.profiles.get_by_user_id(user_id)
    if profile is None:
        raise NotFoundError("Utilisateur introuvable")
    return profile


async def _managed(repos: RepoBundle, profile: SellerProfile) -> ManagedUserRead:
    user = await repos.users.get_by_id(profile.user_id)
    row = ManagedUserRead.model_validate(profile)
    row.email = user.email if user else None
    return row


@router.get(
    "",
    response_model=UserPage,
    summary="User Table",
    description=(
        "Seller profiles, newest first, 20 per page. `banned` accepts `banned`/`active`, "
        "`verified` accepts `verified`/`not_verified`; `search` matches the business name."
    ),
    responses={403: {"description": "Not an admin"}},
)
async def get_users_for_management(
    admin: AdminDep,
    repos: ReposDep,
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    banned: Optional[str] = None,
    verified: Optional[str] = None,
    page: int = Query(default=1, ge=1),
) -> UserPage:
    profiles, total = await repos.profiles.search(
        search=search.strip() if search else None,
        role=role.value if role else None,
        banned=BANNED_FILTERS.get(banned or ""),
        verified=VERIFIED_FILTERS.get(verified or ""),
        limit=USERS_PAGE_SIZE,
        offset=(page - 1) * USERS_PAGE_SIZE,
    )
    emails = await repos.users.emails_by_id(profile.user_id for profile in profiles)
    users = []
    for profile in profiles:
        row = ManagedUserRead.model_validate(profile)
        row.email = emails.get(profile.user_id)
        users.append(row)
    return UserPage(users=users, total=total, pages=math.ceil(total / USERS_PAGE_SIZE), current_page=page)


@router.post(
    "/{user_id}/ban",
    response_model=ActionResult[ManagedUserRead],
    summary="Ban User",
    responses={400: {"description": "Admin tried to ban themselves"}},
)
async def ban_user(user_id: str, body: BanUserRequest, admin: AdminDep, repos: ReposDep) -> ActionResult[ManagedUserRead]:
    """
    Suspend an account.

    The user keeps access to their account page only; every other signed-in
    route answers 403 until they are unbanned.
    """
    if user_id == admin.id:
        raise ValidationFailedError("Vous ne pouvez pas vous bannir vous-même")
    profile = await _get_profile(repos, user_id)
    profile.banned = True
    profile.banned_reason = body.reason
    profile.banned_at = utc_now()
    profile.banned_by = admin.id
    profile = await repos.profiles.update(profile)

    details = f"Reason: {body.reason}. Details: {body.details}"
    await log_admin_action(repos, admin.id, "ban_user", user_id, details=details, target_type="user")
    return ActionResult(data=await _managed(repos, profile))


@router.post("/{user_id}/unban", response_model=ActionResult[ManagedUserRead], summary="Unban User")
async def unban_user(user_id: str, admin: AdminDep, repos: ReposDep) -> ActionResult[ManagedUserRead]:
    profile = await _get_profile(repos, user_id)
    profile.banned = False
    profile.banned_reason = None
    profile.banned_at = None
    profile.banned_by = None
    profile = await repos.profiles.update(profile)
    await log_admin_action(repos, admin.id, "unban_user", user_id, target_type="user")
    return ActionResult(data=await _managed(repos, profile))


@router.put(
    "/{user_id}/role",
    response_model=ActionResult[ManagedUserRead],
    summary="Change Role",
    responses={400: {"description": "Admin tried to demote themselves"}},
)
async def change_user_role(
    user_id: str, body: ChangeRoleRequest, admin: AdminDep, repos: ReposDep
) -> ActionResult[ManagedUserRead]:
    if user_id == admin.id and body.role != UserRole.admin:
        raise ValidationFailedError("Vous ne pouvez pas vous retirer le rôle admin")
    profile = await _get_profile(repos, user_id)
    previous = profile.role
    profile.role = body.role.value
    profile = await repos.profiles.update(profile)
    await log_admin_action(
        repos, admin.id, "change_role", user_id, details=f"Role: {previous} -> {profile.role}", target_type="user"
    )
    return ActionResult(data=await _managed(repos, profile))


@router.put("/{user_id}/verified", response_model=ActionResult[ManagedUserRead], summary="Set Verified Badge")
async def toggle_verified(
    user_id: str, body: ToggleVerifiedRequest, admin: AdminDep, repos: ReposDep
) -> ActionResult[ManagedUserRead]:
    profile = await _get_profile(repos, user_id)
    profile.verified = body.verified
    profile = await repos.profiles.update(profile)
    await log_admin_action(
        repos, admin.id, "toggle_verified", user_id, details=f"Verified: {body.verified}", target_type="user"
    )
    return ActionResult(data=await _managed(repos, profile))


@router.get("/{user_id}/stats", response_model=UserStatsRead, summary="User Stats")
async def get_user_stats(user_id: str, admin: AdminDep, repos: ReposDep) -> UserStatsRead:
    by_status = await repos.listings.count_by_status(user_id)
    return UserStatsRead(
        listings_count=sum(by_status.values()),
        published_count=by_status.get(ListingStatus.published.value, 0),
        messages_sent=await repos.messages.count(Message.sender_id == user_id),
        messages_received=await repos.messages.count(Message.receiver_id == user_id),
        favorites_count=await repos.favorites.count(Favorite.user_id == user_id),
        total_views=await repos.listings.total_views(user_id),
    )


@router.get("/{user_id}/listings", response_model=List[ListingRead], summary="User's Recent Listings")
async def get_user_recent_listings(
    user_id: str, admin: AdminDep, repos: ReposDep, limit: int = Query(default=5, ge=1, le=50)
) -> List[ListingRead]:
    listings = await repos.listings.list_by_owner(user_id, limit=limit)
    return [ListingRead.model_validate(listing) for listing in listings]


@router.get(
    "/{user_id}/logs",
    response_model=List[AdminLogRead],
    summary="User Audit Trail",
    description="The 10 most recent admin actions on a user.",
)
async def get_user_action_logs(user_id: str, admin: AdminDep, repos: ReposDep) -> List[AdminLogRead]:
    return await logs_with_admin_names(repos, await repos.admin_logs.for_target(user_id, limit=10))


@router.delete(
    "/{user_id}",
    response_model=ActionResult,
    summary="Delete User",
    description="Delete an account with its listings, images, messages, favorites, reviews and verification requests.",
    responses={403: {"description": "Admin tried to delete themselves"}, 404: {"description": "User not found"}},
)
async def delete_user(user_id: str, admin: AdminDep, repos: ReposDep, storage: StorageDep) -> ActionResult:
    if user_id == admin.id:
        raise PermissionDeniedError("Vous ne pouvez pas supprimer votre propre compte")
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("Utilisateur introuvable")

    email = user.email
    reviewed_sellers = await repos.reviews.seller_ids_reviewed_by(user_id)
    for listing in await repos.listings.list_by_owner(user_id):
        await storage.remove_listing_images(user_id, listing.images)
    await repos.users.delete_account(user_id)
    for seller_id in reviewed_sellers:
        await refresh_seller_rating(repos, seller_id)
    await log_admin_action(repos, admin.id, "delete_user", user_id, details=f"Email: {email}", target_type="user")
    return ActionResult()
