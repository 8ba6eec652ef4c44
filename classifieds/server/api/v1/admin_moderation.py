"""
Admin Moderation Endpoints.

Listing review (approve, reject, flag, delete) with an audit row per action,
the listing reports filed by users, and the expiry maintenance job.
"""

import math
from typing import List, Optional

from fastapi import APIRouter, Query

from classifieds.core.errors import NotFoundError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.domain.enums import ListingStatus, ReportStatus
from classifieds.core.models.io.admin import (
    AdminLogRead,
    FlagListingRequest,
    ModerationPage,
    RejectListingRequest,
    ReportRead,
    ReportStatusUpdate,
)
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.listings import ExpireResult, ListingDetailRead, ListingRead
from classifieds.server.services.deps import AdminDep, ReposDep, StorageDep
from classifieds.server.services.listings import delete_listings, get_listing_or_404, with_details
from classifieds.server.services.moderation import log_admin_action, logs_with_admin_names

logger = get_logger(__name__)

router = APIRouter()

MODERATION_PAGE_SIZE = 20


@router.get(
    "/listings",
    response_model=ModerationPage,
    summary="Moderation Table",
    description="Listings in any status, newest first, 20 per page. `status=all` disables the status filter.",
    responses={403: {"description": "Not an admin"}},
)
async def get_listings_for_moderation(
    admin: AdminDep,
    repos: ReposDep,
    status: Optional[str] = None,
    category_id: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(default=1, ge=1),
) -> ModerationPage:
    listings, total = await repos.listings.list_for_moderation(
        status=None if not status or status == "all" else status,
        category_id=category_id or None,
        search=search.strip() if search else None,
        limit=MODERATION_PAGE_SIZE,
        offset=(page - 1) * MODERATION_PAGE_SIZE,
    )
    return ModerationPage(
        listings=await with_details(repos, listings),
        total=total,
        pages=math.ceil(total / MODERATION_PAGE_SIZE),
        current_page=page,
    )


@router.get("/listings/{listing_id}", response_model=ListingDetailRead, summary="Moderated Listing")
async def get_listing_for_moderation(listing_id: str, admin: AdminDep, repos: ReposDep) -> ListingDetailRead:
    (detail,) = await with_details(repos, [await get_listing_or_404(repos, listing_id)])
    return detail


@router.get(
    "/listings/{listing_id}/logs",
    response_model=List[AdminLogRead],
    summary="Listing Audit Trail",
    description="The 10 most recent admin actions on a listing.",
)
async def get_listing_logs(listing_id: str, admin: AdminDep, repos: ReposDep) -> List[AdminLogRead]:
    return await logs_with_admin_names(repos, await repos.admin_logs.for_target(listing_id, limit=10))


@router.post("/listings/{listing_id}/approve", response_model=ActionResult[ListingRead], summary="Approve Listing")
async def approve_listing(listing_id: str, admin: AdminDep, repos: ReposDep) -> ActionResult[ListingRead]:
    listing = await get_listing_or_404(repos, listing_id)
    listing.status = ListingStatus.published.value
    listing = await repos.listings.update(listing)
    await log_admin_action(repos, admin.id, "approve_listing", listing.id, target_type="listing")
    return ActionResult(data=ListingRead.model_validate(listing))


@router.post(
    "/listings/{listing_id}/reject",
    response_model=ActionResult[ListingRead],
    summary="Reject Listing",
    description="Send a listing back to draft.",
)
async def reject_listing(
    listing_id: str, admin: AdminDep, repos: ReposDep, body: Optional[RejectListingRequest] = None
) -> ActionResult[ListingRead]:
    listing = await get_listing_or_404(repos, listing_id)
    listing.status = ListingStatus.draft.value
    listing = await repos.listings.update(listing)
    reason = body.reason if body and body.reason else "No reason provided"
    await log_admin_action(repos, admin.id, "reject_listing", listing.id, details=reason, target_type="listing")
    return ActionResult(data=ListingRead.model_validate(listing))


@router.post(
    "/listings/{listing_id}/flag",
    response_model=ActionResult[ListingRead],
    summary="Flag Listing",
    description="Take a listing offline (back to draft) for a stated reason.",
)
async def flag_listing(
    listing_id: str, body: FlagListingRequest, admin: AdminDep, repos: ReposDep
) -> ActionResult[ListingRead]:
    listing = await get_listing_or_404(repos, listing_id)
    listing.status = ListingStatus.draft.value
    listing = await repos.listings.update(listing)
    details = f"Reason: {body.reason}. Details: {body.details or 'None'}"
    await log_admin_action(repos, admin.id, "flag_listing", listing.id, details=details, target_type="listing")
    return ActionResult(data=ListingRead.model_validate(listing))


@router.delete(
    "/listings/{listing_id}",
    response_model=ActionResult,
    summary="Delete Listing",
    description="Delete any listing together with its images.",
)
async def delete_listing(listing_id: str, admin: AdminDep, repos: ReposDep, storage: StorageDep) -> ActionResult:
    listing = await get_listing_or_404(repos, listing_id)
    details = f"Title: {listing.title}"
    await delete_listings(repos, storage, [listing])
    await log_admin_action(repos, admin.id, "delete_listing", listing_id, details=details, target_type="listing")
    return ActionResult()


@router.get(
    "/reports",
    response_model=List[ReportRead],
    summary="Listing Reports",
    description="Reports filed by users, newest first, optionally with one status.",
)
async def get_reports(admin: AdminDep, repos: ReposDep, status: Optional[ReportStatus] = None) -> List[ReportRead]:
    reports = await repos.reports.list_by_status(status.value if status else None)
    return [ReportRead.model_validate(report) for report in reports]


@router.patch("/reports/{report_id}", response_model=ActionResult[ReportRead], summary="Update Report Status")
async def update_report_status(
    report_id: str, body: ReportStatusUpdate, admin: AdminDep, repos: ReposDep
) -> ActionResult[ReportRead]:
    report = await repos.reports.get_by_id(report_id)
    if report is None:
        raise NotFoundError("Signalement introuvable")
    report.status = body.status.value
    report = await repos.reports.update(report)
    await log_admin_action(
        repos, admin.id, "update_report", report.id, details=f"Status: {report.status}", target_type="report"
    )
    return ActionResult(data=ReportRead.model_validate(report))


@router.post(
    "/maintenance/expire-listings",
    response_model=ExpireResult,
    summary="Expire Listings",
    description="Mark published listings past their expiry date as expired.",
)
async def expire_listings(admin: AdminDep, repos: ReposDep) -> ExpireResult:
    expired = await repos.listings.expire_overdue()
    logger.info(f"{expired} listing(s) expired by {admin.id}")
    return ExpireResult(expired=expired)
