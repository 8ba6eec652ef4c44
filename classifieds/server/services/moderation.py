"""Admin audit trail helpers."""

from __future__ import annotations

from typing import List, Optional

from classifieds.core.database.entities.admin_logs import AdminLog
from classifieds.core.database.repositories import RepoBundle
from classifieds.core.models.io.admin import AdminLogRead
from classifieds.core.monitoring import log_admin_event


async def log_admin_action(
    repos: RepoBundle,
    admin_id: str,
    action: str,
    target_id: Optional[str],
    details: Optional[str] = None,
    target_type: Optional[str] = None,
) -> AdminLog:
    """Write the ``admin_logs`` row for an action that just succeeded."""
    entry = await repos.admin_logs.record(admin_id, action, target_id, details=details, target_type=target_type)
    log_admin_event(action, admin_id, target_id, details)
    return entry


async def logs_with_admin_names(repos: RepoBundle, logs: List[AdminLog]) -> List[AdminLogRead]:
    profiles = await repos.profiles.by_user_ids(log.admin_id for log in logs)
    rows = []
    for log in logs:
        row = AdminLogRead.model_validate(log)
        profile = profiles.get(log.admin_id)
        row.admin_name = profile.business_name if profile else None
        rows.append(row)
    return rows
