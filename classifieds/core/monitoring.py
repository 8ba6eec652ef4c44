"""
Logfire integration.

``initialize_logfire`` runs once at startup and instruments the FastAPI app
and the SQLAlchemy engine. Request timings and admin actions are then sent as
Logfire events. Logfire is opt-in: nothing leaves the process unless
``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is set, and until then the
same events are written to the standard log.
"""

import logging
from typing import Optional

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from classifieds.server.core.config import settings

logger = logging.getLogger(__name__)

_logfire_ready = False


def is_logfire_ready() -> bool:
    """Return whether Logfire has been configured for this process."""
    return _logfire_ready


def initialize_logfire(app: FastAPI | None = None, engine: AsyncEngine | None = None) -> bool:
    """
    Configure Logfire and instrument the app and database engine.

    Args:
        app: FastAPI application to instrument (optional).
        engine: Async SQLAlchemy engine to instrument (optional).

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    global _logfire_ready

    config = settings.logfire
    if not config.enabled:
        logger.info("Logfire is off (LOGFIRE_ENABLED=false); events go to the standard log")
        return False

    if not config.token:
        logger.warning(
            "LOGFIRE_ENABLED is true but LOGFIRE_TOKEN is not set; "
            "events go to the standard log"
        )
        return False

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        environment=config.environment,
    )
    if app is not None:
        logfire.instrument_fastapi(app=app)
        logger.info("Logfire: FastAPI instrumentation enabled")
    if engine is not None:
        logfire.instrument_sqlalchemy(engine=engine.sync_engine)
        logger.info("Logfire: SQLAlchemy instrumentation enabled")

    _logfire_ready = True
    logger.info(f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}")
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Report one served request.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if _logfire_ready:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
        return
    logger.debug(f"{method} {path} -> {status_code} in {duration_ms:.2f}ms")


def log_admin_event(action: str, admin_id: str, target_id: Optional[str], details: Optional[str] = None) -> None:
    """
    Record an admin action next to its ``admin_logs`` row.

    Args:
        action: Action name (approve_listing, ban_user, ...)
        admin_id: Identifier of the acting administrator
        target_id: Identifier of the listing or user acted upon
        details: Free-form details
    """
    if _logfire_ready:
        logfire.info("Admin action", action=action, admin_id=admin_id, target_id=target_id, details=details)
        return
    logger.info(f"Admin action {action} by {admin_id} on {target_id}: {details or '-'}")
