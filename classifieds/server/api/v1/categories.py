"""
Category Endpoints.

Read-only access to the seeded category list.
"""

from typing import List

from fastapi import APIRouter

from classifieds.core.models.io.listings import CategoryRead
from classifieds.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=List[CategoryRead],
    summary="List Categories",
    description="Return every category ordered by name.",
)
async def get_categories(repos: ReposDep) -> List[CategoryRead]:
    return [CategoryRead.model_validate(category) for category in await repos.categories.list_ordered()]
