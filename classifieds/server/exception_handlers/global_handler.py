"""
Exception handlers of the marketplace API.

Domain errors (``MarketplaceError``) become ``{"success": false, "error": ...}``
with the error's status code. Anything else is logged with an error id and
answered with a generic 500 body.
"""

import traceback
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from classifieds.core.errors import MarketplaceError
from classifieds.core.logging_config import get_logger

logger = get_logger(__name__)


async def marketplace_exception_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    """
    Render a domain error as a failed action.

    Args:
        request: The HTTP request that raised the error
        exc: The domain error

    Returns:
        JSONResponse with ``success: false`` and the French message
    """
    logger.info(f"{request.method} {request.url.path} refused ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for errors no route anticipated.

    The full traceback goes to the log under a short error id; the client only
    sees the id and the exception class, which support can search the log for.

    Args:
        request: Request being served when the error escaped
        exc: The unexpected exception

    Returns:
        500 JSONResponse with ``detail``, ``error_id`` and ``error_type``
    """
    error_id = uuid.uuid4().hex[:12]

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Install the domain-error and catch-all handlers on ``app``."""
    app.add_exception_handler(MarketplaceError, marketplace_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Marketplace exception handlers installed")
