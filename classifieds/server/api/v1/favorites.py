"""
Favorite Endpoints.

Saving and un-saving published listings and listing the saved ones.
"""

from typing import List

from fastapi import APIRouter, status

from classifieds.core.database.entities.favorites import Favorite
from classifieds.core.errors import ConflictError, NotFoundError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.domain.enums import ListingStatus
from classifieds.core.models.io.common import ActionResult, CountRead
from classifieds.core.models.io.favorites import FavoriteStatusRead
from classifieds.core.models.io.listings import ListingDetailRead
from classifieds.server.services.deps import PrincipalDep, ReposDep
from classifieds.server.services.listings import with_details

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[ListingDetailRead],
    summary="My Favorites",
    description="Saved listings with details, most recently saved first.",
)
async def get_favorites(principal: PrincipalDep, repos: ReposDep) -> List[ListingDetailRead]:
    favorites = await repos.favorites.list_by_user(principal.id)
    by_id = {listing.id: listing for listing in await repos.listings.get_many(f.listing_id for f in favorites)}
    # listings deleted since they were saved are skipped
    listings = [by_id[f.listing_id] for f in favorites if f.listing_id in by_id]
    return await with_details(repos, listings)


@router.get("/count", response_model=CountRead, summary="My Favorites Count")
async def get_favorites_count(principal: PrincipalDep, repos: ReposDep) -> CountRead:
    return CountRead(count=len(await repos.favorites.list_by_user(principal.id)))


@router.post(
    "/{listing_id}",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add Favorite",
    responses={404: {"description": "Listing missing or not published"}, 409: {"description": "Already saved"}},
)
async def add_to_favorites(listing_id: str, principal: PrincipalDep, repos: ReposDep) -> ActionResult:
    listing = await repos.listings.get_by_id(listing_id)
    if listing is None or listing.status != ListingStatus.published.value:
        raise NotFoundError("Annonce non trouvée")
    if await repos.favorites.get_for(principal.id, listing_id) is not None:
        raise ConflictError("Déjà dans vos favoris")
    await repos.favorites.create(Favorite(user_id=principal.id, listing_id=listing_id))
    return ActionResult()


@router.delete("/{listing_id}", response_model=ActionResult, summary="Remove Favorite")
async def remove_from_favorites(listing_id: str, principal: PrincipalDep, repos: ReposDep) -> ActionResult:
    await repos.favorites.remove(principal.id, listing_id)
    return ActionResult()


@router.get("/{listing_id}/status", response_model=FavoriteStatusRead, summary="Is Favorite")
async def is_favorite(listing_id: str, principal: PrincipalDep, repos: ReposDep) -> FavoriteStatusRead:
    favorite = await repos.favorites.get_for(principal.id, listing_id)
    return FavoriteStatusRead(listing_id=listing_id, is_favorite=favorite is not None)
