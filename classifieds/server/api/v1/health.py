"""
Health Check Endpoints.

``/health`` pings the marketplace database so load balancers stop routing
to an instance that lost its connection; ``/version`` reports the API
release.
"""

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from classifieds.core.logging_config import get_logger
from classifieds.server.core import constant
from classifieds.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check that the API server is up and can reach its database.",
    responses={503: {"description": "Database unreachable"}},
)
async def health_check(session: SessionDep, response: Response):
    """
    Health check endpoint.

    Runs ``SELECT 1`` on the request's session. Answers 503 with
    ``database: "unavailable"`` when the query fails.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Database ping failed: {exc}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}


@router.get("/version", summary="Get Version", response_description="Version object.")
async def version():
    return {
        "name": constant.PROJECT_NAME,
        "version": constant.API_VERSION,
        "schema_version": constant.SCHEMA_VERSION,
    }
