"""Notification preferences repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base import utc_now
from ..entities.notification_preferences import NotificationPreferences
from .base import SqlRepository


class NotificationPreferencesRepository(SqlRepository[NotificationPreferences]):
    """Repository for per-user notification preferences (keyed by user id)."""

    model = NotificationPreferences

    async def get_or_create(self, user_id: str) -> NotificationPreferences:
        """Return the user's preferences, creating the defaults on first access."""
        prefs: Optional[NotificationPreferences] = await self.get_by_id(user_id)
        if prefs is None:
            prefs = await self.create(NotificationPreferences(user_id=user_id))
        return prefs

    async def upsert(self, user_id: str, values: Dict[str, Any]) -> NotificationPreferences:
        """Apply ``values`` on top of the current (or default) preferences."""
        prefs = await self.get_or_create(user_id)
        for key, value in values.items():
            if value is not None and key in NotificationPreferences.model_fields and key != "user_id":
                setattr(prefs, key, value)
        prefs.updated_at = utc_now()
        return await self.update(prefs)
