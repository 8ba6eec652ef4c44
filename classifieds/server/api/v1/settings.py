"""
Account Settings Endpoints.

Notification preferences of the signed-in user.
"""

from fastapi import APIRouter

from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.verification import NotificationPreferencesRead, NotificationPreferencesUpdate
from classifieds.server.services.deps import PrincipalDep, ReposDep

router = APIRouter()


@router.get(
    "/notifications",
    response_model=NotificationPreferencesRead,
    summary="Get Notification Preferences",
    description="Return the preferences, creating the defaults on first access.",
)
async def get_notification_preferences(principal: PrincipalDep, repos: ReposDep) -> NotificationPreferencesRead:
    prefs = await repos.notification_preferences.get_or_create(principal.id)
    return NotificationPreferencesRead.model_validate(prefs)


@router.put(
    "/notifications",
    response_model=ActionResult[NotificationPreferencesRead],
    summary="Update Notification Preferences",
    description="Change some switches; the others keep their value.",
)
async def update_notification_preferences(
    body: NotificationPreferencesUpdate, principal: PrincipalDep, repos: ReposDep
) -> ActionResult[NotificationPreferencesRead]:
    prefs = await repos.notification_preferences.upsert(principal.id, body.model_dump(exclude_unset=True))
    return ActionResult(data=NotificationPreferencesRead.model_validate(prefs))
