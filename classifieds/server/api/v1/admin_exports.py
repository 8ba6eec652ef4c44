"""
Admin Export Endpoints.

CSV downloads of users and listings, and the counters shown next to them.
"""

from fastapi import APIRouter, Response

from classifieds.core.models.io.admin import ExportStatsRead
from classifieds.server.services import exports
from classifieds.server.services.deps import AdminDep, ReposDep

router = APIRouter()


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/users.csv",
    summary="Export Users",
    description="Every seller profile as CSV, file named `utilisateurs_YYYY-MM-DD.csv`.",
    responses={200: {"content": {"text/csv": {}}}, 403: {"description": "Not an admin"}},
)
async def export_users(admin: AdminDep, repos: ReposDep) -> Response:
    return _csv_response(await exports.export_users(repos), exports.export_filename("utilisateurs"))


@router.get(
    "/listings.csv",
    summary="Export Listings",
    description="The 1000 newest listings as CSV, file named `annonces_YYYY-MM-DD.csv`.",
    responses={200: {"content": {"text/csv": {}}}, 403: {"description": "Not an admin"}},
)
async def export_listings(admin: AdminDep, repos: ReposDep) -> Response:
    return _csv_response(await exports.export_listings(repos), exports.export_filename("annonces"))


@router.get("/stats", response_model=ExportStatsRead, summary="Export Counters")
async def get_export_stats(admin: AdminDep, repos: ReposDep) -> ExportStatsRead:
    return ExportStatsRead(
        users=await repos.profiles.count(),
        listings=await repos.listings.count(),
        messages=await repos.messages.count(),
    )
