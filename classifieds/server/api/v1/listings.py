"""
Listing Endpoints.

Public search and detail pages, the seller's listing management (create,
edit, publish, unpublish, delete, image upload), abuse reports, and the JSON
bulk delete endpoint kept at ``/api/listings/bulk-delete``.
"""

import math
from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.listings import Listing
from classifieds.core.database.entities.reports import Report
from classifieds.core.errors import (
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from classifieds.core.logging_config import get_logger
from classifieds.core.models.domain.enums import ListingCondition, ListingStatus, SortOption
from classifieds.core.models.io.admin import ReportCreate, ReportRead
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.listings import (
    BulkDeleteRequest,
    BulkDeleteResult,
    ImageUploadRead,
    ListingCreate,
    ListingDetailRead,
    ListingRead,
    ListingSearchResult,
    ListingUpdate,
)
from classifieds.server.core.config import settings
from classifieds.server.services.deps import (
    OptionalPrincipalDep,
    PrincipalDep,
    ReposDep,
    StorageDep,
)
from classifieds.server.services.listings import (
    delete_listings,
    get_listing_or_404,
    get_owned_listing,
    with_details,
)

logger = get_logger(__name__)

router = APIRouter()
bulk_router = APIRouter()

REQUIRED_FIELDS_MESSAGE = "Tous les champs obligatoires doivent être remplis"


async def _validated_form(body: ListingCreate, repos: ReposDep) -> dict:
    """Check the listing form and return the column values to store."""
    title = (body.title or "").strip()
    description = (body.description or "").strip()
    city = (body.location_city or "").strip()
    if not title or not description or not body.category_id or not city:
        raise ValidationFailedError(REQUIRED_FIELDS_MESSAGE)
    if await repos.categories.get_by_id(body.category_id) is None:
        raise ValidationFailedError("Catégorie inconnue")
    return {
        "title": title,
        "description": description,
        "category_id": body.category_id,
        "price": body.price,
        "location_city": city,
        "condition": (body.condition or ListingCondition.good).value,
        "images": list(body.images or []),
    }


@router.get(
    "",
    response_model=ListingSearchResult,
    summary="Search Listings",
    description="Search published listings with optional filters, sort order and pagination.",
    response_description="One page of listings with the total count and number of pages.",
)
async def search_listings(
    repos: ReposDep,
    search: Optional[str] = Query(default=None, description="Text searched in title and description"),
    category_id: Optional[str] = None,
    city: Optional[str] = None,
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    condition: Optional[ListingCondition] = None,
    sort_by: SortOption = SortOption.recent,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1, le=100),
) -> ListingSearchResult:
    """
    Search published listings.

    - **search**: case-insensitive match in title or description.
    - **sort_by**: `recent` (default), `popular` (most viewed), `price_asc`, `price_desc`;
      listings without a price come last for both price orders.
    - **pages**: `ceil(count / limit)`.
    """
    listings, count = await repos.listings.search(
        search=search.strip() if search else None,
        category_id=category_id or None,
        city=city or None,
        min_price=min_price,
        max_price=max_price,
        condition=condition.value if condition else None,
        sort_by=sort_by.value,
        limit=limit,
        offset=(page - 1) * limit,
    )
    return ListingSearchResult(
        listings=await with_details(repos, listings),
        count=count,
        pages=math.ceil(count / limit) if count else 0,
    )


@router.post(
    "",
    response_model=ActionResult[ListingRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Listing",
    description="Create a draft listing for the signed-in seller.",
    responses={
        400: {"description": "Required field missing or unknown category"},
        401: {"description": "Not signed in"},
    },
)
async def create_listing(body: ListingCreate, principal: PrincipalDep, repos: ReposDep) -> ActionResult[ListingRead]:
    """
    Create a listing.

    Title, description, category and city are required. The listing starts as a
    draft; publish it to make it visible.
    """
    values = await _validated_form(body, repos)
    listing = await repos.listings.create(Listing(user_id=principal.id, status=ListingStatus.draft.value, **values))
    logger.info(f"Listing {listing.id} created by {principal.id}")
    return ActionResult(data=ListingRead.model_validate(listing))


@router.get(
    "/mine",
    response_model=List[ListingDetailRead],
    summary="My Listings",
    description="Return the signed-in seller's listings, newest first, optionally filtered by status.",
)
async def get_my_listings(
    principal: PrincipalDep, repos: ReposDep, status: Optional[ListingStatus] = None
) -> List[ListingDetailRead]:
    listings = await repos.listings.list_by_owner(principal.id, status.value if status else None)
    return await with_details(repos, listings)


@router.post(
    "/images",
    response_model=ActionResult[ImageUploadRead],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Listing Image",
    description="Store a JPEG, PNG or WEBP image of at most 5 MB and return its public URL.",
    responses={400: {"description": "Missing file, file too large or unsupported format"}},
)
async def upload_listing_image(
    principal: PrincipalDep, storage: StorageDep, file: UploadFile = File(...)
) -> ActionResult[ImageUploadRead]:
    stored = await storage.save_listing_image(principal.id, file)
    return ActionResult(data=ImageUploadRead(path=stored.path, url=stored.url))


@router.get(
    "/{listing_id}",
    response_model=ListingDetailRead,
    summary="Get Listing",
    description="Return a listing with its category and seller. Unpublished listings are only visible to their owner and admins.",
    responses={404: {"description": "Listing not found"}},
)
async def get_listing_by_id(listing_id: str, repos: ReposDep, principal: OptionalPrincipalDep) -> ListingDetailRead:
    """
    Get a listing by id.

    Viewing a published listing someone else owns counts one view.
    """
    listing = await get_listing_or_404(repos, listing_id)
    is_owner = principal is not None and principal.id == listing.user_id
    if listing.status != ListingStatus.published.value:
        if not is_owner and not (principal is not None and principal.is_admin):
            raise NotFoundError("Annonce non trouvée")
    elif not is_owner:
        await repos.listings.increment_views(listing.id)
        await repos.session.refresh(listing)
    (detail,) = await with_details(repos, [listing])
    return detail


@router.put(
    "/{listing_id}",
    response_model=ActionResult[ListingRead],
    summary="Update Listing",
    description="Edit a listing owned by the signed-in seller.",
    responses={400: {"description": "Required field missing"}, 403: {"description": "Not the owner"}},
)
async def update_listing(
    listing_id: str, body: ListingUpdate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[ListingRead]:
    listing = await get_owned_listing(repos, listing_id, principal.id)
    for field, value in (await _validated_form(body, repos)).items():
        setattr(listing, field, value)
    listing = await repos.listings.update(listing)
    return ActionResult(data=ListingRead.model_validate(listing))


@router.post(
    "/{listing_id}/publish",
    response_model=ActionResult[ListingRead],
    summary="Publish Listing",
    description="Publish a listing; it expires after the configured lifetime (60 days by default).",
    responses={403: {"description": "Not the owner"}},
)
async def publish_listing(listing_id: str, principal: PrincipalDep, repos: ReposDep) -> ActionResult[ListingRead]:
    listing = await get_owned_listing(repos, listing_id, principal.id)
    listing.status = ListingStatus.published.value
    listing.expires_at = utc_now() + timedelta(days=settings.marketplace.listing_lifetime_days)
    listing = await repos.listings.update(listing)
    logger.info(f"Listing {listing.id} published until {listing.expires_at}")
    return ActionResult(data=ListingRead.model_validate(listing))


@router.post(
    "/{listing_id}/unpublish",
    response_model=ActionResult[ListingRead],
    summary="Unpublish Listing",
    description="Move a listing back to draft.",
    responses={403: {"description": "Not the owner"}},
)
async def unpublish_listing(listing_id: str, principal: PrincipalDep, repos: ReposDep) -> ActionResult[ListingRead]:
    listing = await get_owned_listing(repos, listing_id, principal.id)
    listing.status = ListingStatus.draft.value
    listing = await repos.listings.update(listing)
    return ActionResult(data=ListingRead.model_validate(listing))


@router.delete(
    "/{listing_id}",
    response_model=ActionResult,
    summary="Delete Listing",
    description="Delete a listing owned by the signed-in seller together with its images.",
    responses={403: {"description": "Not the owner"}},
)
async def delete_listing(
    listing_id: str, principal: PrincipalDep, repos: ReposDep, storage: StorageDep
) -> ActionResult:
    listing = await get_owned_listing(repos, listing_id, principal.id)
    await delete_listings(repos, storage, [listing])
    return ActionResult()


@router.post(
    "/{listing_id}/report",
    response_model=ActionResult[ReportRead],
    status_code=status.HTTP_201_CREATED,
    summary="Report Listing",
    description="Report a listing to the moderators.",
    responses={404: {"description": "Listing not found"}},
)
async def report_listing(
    listing_id: str, body: ReportCreate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[ReportRead]:
    await get_listing_or_404(repos, listing_id)
    report = await repos.reports.create(
        Report(listing_id=listing_id, reported_by=principal.id, reason=body.reason, description=body.description)
    )
    logger.info(f"Listing {listing_id} reported by {principal.id}: {body.reason}")
    return ActionResult(data=ReportRead.model_validate(report))


@bulk_router.post(
    "/bulk-delete",
    response_model=BulkDeleteResult,
    summary="Bulk Delete Listings",
    description="Delete several listings owned by the signed-in seller in one call.",
    responses={
        400: {"description": "listingIds missing or empty"},
        401: {"description": "Not signed in"},
        403: {"description": "At least one listing belongs to someone else"},
    },
)
async def bulk_delete(
    body: BulkDeleteRequest, principal: OptionalPrincipalDep, repos: ReposDep, storage: StorageDep
) -> BulkDeleteResult:
    """
    Delete several listings.

    Every id must belong to the caller, otherwise nothing is deleted.
    """
    if principal is None:
        raise NotAuthenticatedError("Non authentifié")
    if principal.is_banned:
        raise PermissionDeniedError("Votre compte a été suspendu")
    if not body.listingIds:
        raise ValidationFailedError("IDs invalides")

    listings = await repos.listings.get_many(body.listingIds)
    if len(listings) != len(set(body.listingIds)) or any(listing.user_id != principal.id for listing in listings):
        raise PermissionDeniedError("Non autorisé")

    deleted = await delete_listings(repos, storage, listings)
    return BulkDeleteResult(deletedCount=deleted)
