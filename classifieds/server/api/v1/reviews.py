"""
Seller Review Endpoints.

Buyers rate sellers once each; the seller's profile rating is recomputed
after every change.
"""

from typing import List, Sequence

from fastapi import APIRouter, Query, status

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.reviews import Review
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationFailedError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.reviews import (
    CanReviewRead,
    ReviewCreate,
    ReviewDetailRead,
    ReviewerSummary,
    ReviewRead,
    ReviewStatsRead,
    ReviewUpdate,
)
from classifieds.server.services.deps import OptionalPrincipalDep, PrincipalDep, ReposDep
from classifieds.server.services.reviews import rating_stats, refresh_seller_rating

logger = get_logger(__name__)

router = APIRouter()


async def _with_names(repos: RepoBundle, reviews: Sequence[Review]) -> List[ReviewDetailRead]:
    user_ids = {review.reviewer_id for review in reviews} | {review.seller_id for review in reviews}
    profiles = await repos.profiles.by_user_ids(user_ids)
    listings = {
        listing.id: listing
        for listing in await repos.listings.get_many(review.listing_id for review in reviews if review.listing_id)
    }

    def summary(user_id: str):
        profile = profiles.get(user_id)
        if profile is None:
            return None
        return ReviewerSummary(business_name=profile.business_name, verified=profile.verified)

    details = []
    for review in reviews:
        detail = ReviewDetailRead.model_validate(review)
        detail.reviewer_profile = summary(review.reviewer_id)
        detail.seller_profile = summary(review.seller_id)
        listing = listings.get(review.listing_id) if review.listing_id else None
        detail.listing_title = listing.title if listing else None
        details.append(detail)
    return details


async def _get_review(repos: RepoBundle, review_id: str) -> Review:
    review = await repos.reviews.get_by_id(review_id)
    if review is None:
        raise NotFoundError("Avis introuvable")
    return review


@router.post(
    "",
    response_model=ActionResult[ReviewRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Review",
    description="Rate a seller from 1 to 5 with a comment.",
    responses={
        400: {"description": "Self review or blank comment"},
        404: {"description": "Seller not found"},
        409: {"description": "Seller already reviewed by this user"},
    },
)
async def create_review(body: ReviewCreate, principal: PrincipalDep, repos: ReposDep) -> ActionResult[ReviewRead]:
    if body.seller_id == principal.id:
        raise ValidationFailedError("Vous ne pouvez pas vous évaluer vous-même")
    if not body.comment.strip():
        raise ValidationFailedError("Le commentaire est requis")
    if await repos.users.get_by_id(body.seller_id) is None:
        raise NotFoundError("Vendeur introuvable")
    if await repos.reviews.get_for(principal.id, body.seller_id) is not None:
        raise ConflictError("Vous avez déjà laissé un avis pour ce vendeur")

    review = await repos.reviews.create(
        Review(
            seller_id=body.seller_id,
            reviewer_id=principal.id,
            listing_id=body.listing_id or None,
            rating=body.rating,
            title=body.title,
            comment=body.comment.strip(),
        )
    )
    await refresh_seller_rating(repos, body.seller_id)
    logger.info(f"Review {review.id} left on seller {body.seller_id}")
    return ActionResult(data=ReviewRead.model_validate(review))


@router.get(
    "/seller/{seller_id}",
    response_model=List[ReviewDetailRead],
    summary="Seller Reviews",
    description="A seller's reviews, newest first, with reviewer names and listing titles.",
)
async def get_seller_reviews(
    seller_id: str,
    repos: ReposDep,
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> List[ReviewDetailRead]:
    reviews = await repos.reviews.list_for_seller(seller_id, limit=limit, offset=offset)
    return await _with_names(repos, reviews)


@router.get("/seller/{seller_id}/stats", response_model=ReviewStatsRead, summary="Seller Rating Stats")
async def get_seller_review_stats(seller_id: str, repos: ReposDep) -> ReviewStatsRead:
    """
    Aggregate rating of a seller.

    `average_rating` has one decimal and is `"5.0"` for a seller without reviews.
    """
    return rating_stats(await repos.reviews.ratings_for_seller(seller_id))


@router.get("/seller/{seller_id}/can-review", response_model=CanReviewRead, summary="Can Review Seller")
async def can_user_review(seller_id: str, repos: ReposDep, principal: OptionalPrincipalDep) -> CanReviewRead:
    if principal is None:
        return CanReviewRead(can_review=False, reason="not_authenticated")
    if principal.id == seller_id:
        return CanReviewRead(can_review=False, reason="self_review")
    if await repos.reviews.get_for(principal.id, seller_id) is not None:
        return CanReviewRead(can_review=False, reason="already_reviewed")
    return CanReviewRead(can_review=True)


@router.get(
    "/{review_id}",
    response_model=ReviewDetailRead,
    summary="Get Review",
    responses={404: {"description": "Review not found"}},
)
async def get_review_by_id(review_id: str, repos: ReposDep) -> ReviewDetailRead:
    (detail,) = await _with_names(repos, [await _get_review(repos, review_id)])
    return detail


@router.put(
    "/{review_id}",
    response_model=ActionResult[ReviewRead],
    summary="Update Review",
    responses={403: {"description": "Not the reviewer"}, 404: {"description": "Review not found"}},
)
async def update_review(
    review_id: str, body: ReviewUpdate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[ReviewRead]:
    review = await _get_review(repos, review_id)
    if review.reviewer_id != principal.id:
        raise PermissionDeniedError("Non autorisé")

    changes = body.model_dump(exclude_unset=True)
    if "comment" in changes and not (changes["comment"] or "").strip():
        raise ValidationFailedError("Le commentaire est requis")
    for field, value in changes.items():
        if value is not None or field == "title":
            setattr(review, field, value)
    review.updated_at = utc_now()
    review = await repos.reviews.update(review)
    await refresh_seller_rating(repos, review.seller_id)
    return ActionResult(data=ReviewRead.model_validate(review))


@router.delete(
    "/{review_id}",
    response_model=ActionResult,
    summary="Delete Review",
    description="Delete a review; allowed for its author and for admins.",
    responses={403: {"description": "Neither the reviewer nor an admin"}, 404: {"description": "Review not found"}},
)
async def delete_review(review_id: str, principal: PrincipalDep, repos: ReposDep) -> ActionResult:
    review = await _get_review(repos, review_id)
    if review.reviewer_id != principal.id and not principal.is_admin:
        raise PermissionDeniedError("Non autorisé")
    seller_id = review.seller_id
    await repos.reviews.delete(review.id)
    await refresh_seller_rating(repos, seller_id)
    return ActionResult()
