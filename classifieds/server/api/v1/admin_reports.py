"""
Admin Report Endpoints.

Growth over the last 30 days, category and city distributions, top sellers
and the platform overview.
"""

from typing import List

from fastapi import APIRouter

from classifieds.core.models.io.admin import (
    DistributionEntry,
    GrowthMetricsRead,
    PlatformOverviewRead,
    TopSellerRead,
)
from classifieds.server.services import analytics
from classifieds.server.services.deps import AdminDep, ReposDep

router = APIRouter()


@router.get(
    "/growth",
    response_model=GrowthMetricsRead,
    summary="Growth Metrics",
    description="Users, listings and messages of the last 30 days against the 30 days before.",
    responses={403: {"description": "Not an admin"}},
)
async def get_growth_metrics(admin: AdminDep, repos: ReposDep) -> GrowthMetricsRead:
    return await analytics.growth_metrics(repos)


@router.get("/categories", response_model=List[DistributionEntry], summary="Listings Per Category")
async def get_category_distribution(admin: AdminDep, repos: ReposDep) -> List[DistributionEntry]:
    return await analytics.category_distribution(repos)


@router.get("/cities", response_model=List[DistributionEntry], summary="Top Cities")
async def get_city_distribution(admin: AdminDep, repos: ReposDep) -> List[DistributionEntry]:
    return await analytics.city_distribution(repos)


@router.get("/top-sellers", response_model=List[TopSellerRead], summary="Top Sellers")
async def get_top_sellers(admin: AdminDep, repos: ReposDep) -> List[TopSellerRead]:
    return await analytics.top_sellers(repos)


@router.get("/overview", response_model=PlatformOverviewRead, summary="Platform Overview")
async def get_platform_overview(admin: AdminDep, repos: ReposDep) -> PlatformOverviewRead:
    return await analytics.platform_overview(repos)
