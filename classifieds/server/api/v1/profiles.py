"""
Seller Profile Endpoints.

Public profile lookup and editing of the signed-in seller's own profile.
"""

from fastapi import APIRouter

from classifieds.core.errors import NotFoundError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.profiles import SellerProfileRead, SellerProfileUpdate
from classifieds.server.services.deps import PrincipalDep, ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.put(
    "/me",
    response_model=ActionResult[SellerProfileRead],
    summary="Update My Profile",
    description="Update business name, description, phone, WhatsApp number and city of the signed-in seller.",
    responses={401: {"description": "Not signed in"}, 403: {"description": "Account suspended"}},
)
async def update_seller_profile(
    body: SellerProfileUpdate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[SellerProfileRead]:
    """
    Update the seller profile.

    Only the fields present in the body change.
    """
    profile = principal.profile or await repos.profiles.get_by_user_id(principal.id)
    if profile is None:
        raise NotFoundError("Profil introuvable")

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    profile = await repos.profiles.update(profile)
    logger.info(f"Seller profile updated for {principal.id}")
    return ActionResult(data=SellerProfileRead.model_validate(profile))


@router.get(
    "/{user_id}",
    response_model=SellerProfileRead,
    summary="Get Seller Profile",
    description="Return the public seller profile of a user.",
    responses={404: {"description": "Profile not found"}},
)
async def get_seller_profile(user_id: str, repos: ReposDep) -> SellerProfileRead:
    profile = await repos.profiles.get_by_user_id(user_id)
    if profile is None:
        raise NotFoundError("Profil introuvable")
    return SellerProfileRead.model_validate(profile)
