"""Unit tests for the exception handlers."""

import json

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from classifieds.core.errors import (
    ConflictError,
    MarketplaceError,
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    UserBannedError,
    ValidationFailedError,
)
from classifieds.server.exception_handlers import setup_exception_handlers


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("Annonce non trouvée")

    @app.get("/banned")
    async def banned():
        raise UserBannedError()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return app


@pytest.mark.parametrize(
    "error,status_code,message",
    [
        (ValidationFailedError(), 400, "Données invalides"),
        (NotAuthenticatedError(), 401, "Non authentifié"),
        (PermissionDeniedError(), 403, "Non autorisé"),
        (UserBannedError(), 403, "Votre compte a été suspendu"),
        (NotFoundError(), 404, "Ressource introuvable"),
        (ConflictError("Déjà dans vos favoris"), 409, "Déjà dans vos favoris"),
    ],
)
def test_error_classes(error: MarketplaceError, status_code: int, message: str):
    assert error.status_code == status_code
    assert error.message == message
    assert str(error) == message


@pytest.mark.asyncio
async def test_domain_error_is_rendered_as_failed_action(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/not-found")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Annonce non trouvée"}


@pytest.mark.asyncio
async def test_subclass_uses_its_own_status(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/banned")
    assert response.status_code == 403
    assert response.json()["error"] == "Votre compte a été suspendu"


@pytest.mark.asyncio
async def test_unhandled_error_returns_error_id(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")
    assert response.status_code == 500
    body = json.loads(response.text)
    assert body["detail"] == "Internal server error"
    assert body["error_type"] == "RuntimeError"
    assert len(body["error_id"]) == 12
