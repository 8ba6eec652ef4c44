"""
Admin Verification Endpoints.

Review of seller verification requests. Approval marks the seller profile
as verified.
"""

from typing import List, Optional

from fastapi import APIRouter

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.verification_requests import VerificationRequest
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.errors import NotFoundError
from classifieds.core.models.domain.enums import VerificationStatus
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.verification import (
    RejectVerificationRequest,
    VerificationRequestAdminRead,
    VerificationRequestRead,
)
from classifieds.server.services.deps import AdminDep, ReposDep
from classifieds.server.services.moderation import log_admin_action

router = APIRouter()


async def _get_request(repos: RepoBundle, request_id: str) -> VerificationRequest:
    request = await repos.verification_requests.get_by_id(request_id)
    if request is None:
        raise NotFoundError("Demande introuvable")
    return request


@router.get(
    "",
    response_model=List[VerificationRequestAdminRead],
    summary="Verification Requests",
    description="All requests, newest first, with the requester's email (`N/A` when unknown).",
    responses={403: {"description": "Not an admin"}},
)
async def get_all_verification_requests(
    admin: AdminDep, repos: ReposDep, status: Optional[VerificationStatus] = None
) -> List[VerificationRequestAdminRead]:
    requests = await repos.verification_requests.list_by_status(status.value if status else None)
    emails = await repos.users.emails_by_id(request.user_id for request in requests)
    rows = []
    for request in requests:
        row = VerificationRequestAdminRead.model_validate(request)
        row.user_email = emails.get(request.user_id, "N/A")
        rows.append(row)
    return rows


@router.post("/{request_id}/approve", response_model=ActionResult[VerificationRequestRead], summary="Approve Request")
async def approve_verification_request(
    request_id: str, admin: AdminDep, repos: ReposDep
) -> ActionResult[VerificationRequestRead]:
    request = await _get_request(repos, request_id)
    now = utc_now()
    request.status = VerificationStatus.approved.value
    request.reviewed_by = admin.id
    request.reviewed_at = now
    request.updated_at = now
    request = await repos.verification_requests.update(request)

    profile = await repos.profiles.get_by_user_id(request.user_id)
    if profile is not None:
        profile.verified = True
        await repos.profiles.update(profile)

    await log_admin_action(
        repos,
        admin.id,
        "approve_verification",
        request.user_id,
        details=f"Request: {request.id}",
        target_type="verification_request",
    )
    return ActionResult(data=VerificationRequestRead.model_validate(request))


@router.post("/{request_id}/reject", response_model=ActionResult[VerificationRequestRead], summary="Reject Request")
async def reject_verification_request(
    request_id: str, body: RejectVerificationRequest, admin: AdminDep, repos: ReposDep
) -> ActionResult[VerificationRequestRead]:
    request = await _get_request(repos, request_id)
    now = utc_now()
    request.status = VerificationStatus.rejected.value
    request.rejection_reason = body.reason
    request.reviewed_by = admin.id
    request.reviewed_at = now
    request.updated_at = now
    request = await repos.verification_requests.update(request)

    await log_admin_action(
        repos,
        admin.id,
        "reject_verification",
        request.user_id,
        details=f"Reason: {body.reason}",
        target_type="verification_request",
    )
    return ActionResult(data=VerificationRequestRead.model_validate(request))
