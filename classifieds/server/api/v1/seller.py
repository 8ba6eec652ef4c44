"""
Seller Dashboard Endpoints.
"""

from fastapi import APIRouter

from classifieds.core.models.io.admin import SellerAnalyticsRead
from classifieds.server.services.analytics import seller_analytics
from classifieds.server.services.deps import PrincipalDep, ReposDep

router = APIRouter()


@router.get(
    "/analytics",
    response_model=SellerAnalyticsRead,
    summary="My Listing Analytics",
    description="Listing counts per status, views, favorites and messages received, and published listings per category.",
)
async def get_seller_analytics(principal: PrincipalDep, repos: ReposDep) -> SellerAnalyticsRead:
    return await seller_analytics(repos, principal.id)
