"""
Seller Verification Endpoints.

Sellers submit one verification request at a time and can follow its status.
"""

from typing import Optional

from fastapi import APIRouter, status

from classifieds.core.database.entities.verification_requests import VerificationRequest
from classifieds.core.errors import ConflictError, ValidationFailedError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.verification import VerificationRequestCreate, VerificationRequestRead
from classifieds.server.services.deps import PrincipalDep, ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ActionResult[VerificationRequestRead],
    status_code=status.HTTP_201_CREATED,
    summary="Request Verification",
    description="Submit business details and document links for review by an admin.",
    responses={
        400: {"description": "Business name or phone missing"},
        409: {"description": "A request is already pending"},
    },
)
async def create_verification_request(
    body: VerificationRequestCreate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[VerificationRequestRead]:
    if await repos.verification_requests.pending_for_user(principal.id) is not None:
        raise ConflictError("Vous avez déjà une demande en attente")

    values = body.model_dump()
    values["business_name"] = (body.business_name or "").strip()
    values["phone"] = (body.phone or "").strip()
    if not values["business_name"] or not values["phone"]:
        raise ValidationFailedError("Le nom commercial et le téléphone sont requis")

    request = await repos.verification_requests.create(VerificationRequest(user_id=principal.id, **values))
    logger.info(f"Verification request {request.id} submitted by {principal.id}")
    return ActionResult(data=VerificationRequestRead.model_validate(request))


@router.get(
    "/me",
    response_model=Optional[VerificationRequestRead],
    summary="My Verification Request",
    description="The signed-in seller's latest verification request, or null.",
)
async def get_user_verification_request(principal: PrincipalDep, repos: ReposDep) -> Optional[VerificationRequestRead]:
    request = await repos.verification_requests.latest_for_user(principal.id)
    return VerificationRequestRead.model_validate(request) if request else None
