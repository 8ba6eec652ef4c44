"""
Listing helpers shared by the public, seller and admin routers.

Listings are returned with their category and the seller's public profile;
both are batch loaded for a whole page instead of per row.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from classifieds.core.database.entities.listings import Listing
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.errors import NotFoundError, PermissionDeniedError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.listings import CategoryRead, ListingDetailRead, ListingSummary
from classifieds.core.models.io.profiles import ProfileSummary
from classifieds.server.services.storage import ImageStorage

logger = get_logger(__name__)


async def with_details(repos: RepoBundle, listings: Sequence[Listing]) -> List[ListingDetailRead]:
    """Attach category and seller profile to each listing."""
    categories = await repos.categories.by_ids(listing.category_id for listing in listings)
    profiles = await repos.profiles.by_user_ids(listing.user_id for listing in listings)

    details = []
    for listing in listings:
        detail = ListingDetailRead.model_validate(listing)
        category = categories.get(listing.category_id)
        profile = profiles.get(listing.user_id)
        detail.category = CategoryRead.model_validate(category) if category else None
        detail.seller_profile = ProfileSummary.model_validate(profile) if profile else None
        details.append(detail)
    return details


async def summaries(repos: RepoBundle, listing_ids: Iterable[Optional[str]]) -> Dict[str, ListingSummary]:
    """Short references for the given listing ids; unknown ids are left out."""
    listings = await repos.listings.get_many(listing_id for listing_id in listing_ids if listing_id)
    return {listing.id: ListingSummary.model_validate(listing) for listing in listings}


async def get_owned_listing(repos: RepoBundle, listing_id: str, owner_id: str) -> Listing:
    """Load a listing the caller must own.

    Raises:
        PermissionDeniedError: The listing does not exist or belongs to someone else
    """
    listing = await repos.listings.get_by_id(listing_id)
    if listing is None or listing.user_id != owner_id:
        raise PermissionDeniedError("Non autorisé")
    return listing


async def get_listing_or_404(repos: RepoBundle, listing_id: str) -> Listing:
    listing = await repos.listings.get_by_id(listing_id)
    if listing is None:
        raise NotFoundError("Annonce non trouvée")
    return listing


async def delete_listings(repos: RepoBundle, storage: ImageStorage, listings: Sequence[Listing]) -> int:
    """Remove the listings' images, then the listings themselves.

    Returns:
        Number of listings deleted
    """
    for listing in listings:
        await storage.remove_listing_images(listing.user_id, listing.images)
    deleted = await repos.listings.delete_many([listing.id for listing in listings])
    logger.info(f"Deleted {deleted} listing(s)")
    return deleted
