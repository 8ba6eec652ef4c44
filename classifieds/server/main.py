"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers the exception handlers, mounts the uploaded
images and includes all API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from classifieds.core.database.repositories.listings import ListingRepository
from classifieds.core.database.session import async_session_maker, engine, init_db
from classifieds.core.logging_config import get_logger, setup_logging
from classifieds.core.monitoring import initialize_logfire

from .api.v1 import (
    admin_dashboard,
    admin_exports,
    admin_moderation,
    admin_reports,
    admin_users,
    admin_verification,
    auth,
    categories,
    favorites,
    health,
    listings,
    messages,
    profiles,
    reviews,
    seller,
    seo,
    verification,
)
from .api.v1 import settings as settings_api
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup the database is initialized and published listings past their
    expiry date are marked as expired.
    """
    # Startup
    try:
        logger.info("Starting up Classifieds Marketplace Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    try:
        async with async_session_maker() as session:
            expired = await ListingRepository(session).expire_overdue()
        if expired:
            logger.info(f"Expired {expired} overdue listing(s)")
    except Exception as e:
        logger.error(f"Listing expiry on startup failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Classifieds Marketplace Server...")
    await engine.dispose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Classifieds Marketplace API

    Backend of a French classified-ads marketplace: listings with photos, direct
    messages between buyers and sellers, favorites, seller reviews and
    verification, and the admin area (moderation, users, reports, exports).
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)

# Uploaded listing images
Path(settings.storage.root).mkdir(parents=True, exist_ok=True)
app.mount(settings.storage.media_url, StaticFiles(directory=settings.storage.root), name="media")

API = constant.API_V1_STR

app.include_router(health.router, tags=["health"])
app.include_router(seo.router, tags=["seo"])
app.include_router(auth.router, prefix=f"{API}/auth", tags=["auth"])
app.include_router(profiles.router, prefix=f"{API}/profiles", tags=["profiles"])
app.include_router(categories.router, prefix=f"{API}/categories", tags=["categories"])
app.include_router(listings.router, prefix=f"{API}/listings", tags=["listings"])
app.include_router(listings.bulk_router, prefix="/api/listings", tags=["listings"])
app.include_router(messages.router, prefix=f"{API}/messages", tags=["messages"])
app.include_router(favorites.router, prefix=f"{API}/favorites", tags=["favorites"])
app.include_router(reviews.router, prefix=f"{API}/reviews", tags=["reviews"])
app.include_router(verification.router, prefix=f"{API}/verification", tags=["verification"])
app.include_router(seller.router, prefix=f"{API}/seller", tags=["seller"])
app.include_router(settings_api.router, prefix=f"{API}/settings", tags=["settings"])
app.include_router(admin_dashboard.router, prefix=f"{API}/admin/dashboard", tags=["admin"])
app.include_router(admin_moderation.router, prefix=f"{API}/admin/moderation", tags=["admin"])
app.include_router(admin_users.router, prefix=f"{API}/admin/users", tags=["admin"])
app.include_router(admin_verification.router, prefix=f"{API}/admin/verification", tags=["admin"])
app.include_router(admin_reports.router, prefix=f"{API}/admin/reports", tags=["admin"])
app.include_router(admin_exports.router, prefix=f"{API}/admin/exports", tags=["admin"])

initialize_logfire(app=app, engine=engine)
