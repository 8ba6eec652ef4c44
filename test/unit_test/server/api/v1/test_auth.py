import pytest
from httpx import AsyncClient

from classifieds.core.database.entities.users import User
from classifieds.server.api.v1.auth import issue_email_token

pytestmark = pytest.mark.asyncio

API = "/api/v1/auth"


async def test_signup_creates_account_and_profile(client: AsyncClient):
    response = await client.post(
        f"{API}/signup",
        json={"email": "Vendeur@Example.fr", "password": "secret123", "business_name": "Boutique Dupont"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["data"]["email"] == "vendeur@example.fr"
    assert data["data"]["email_verified"] is False


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"password": "secret123"}, "Email et mot de passe requis"),
        ({"email": "a@example.fr"}, "Email et mot de passe requis"),
        ({"email": "   ", "password": "secret123"}, "Email et mot de passe requis"),
        ({"email": "a@example.fr", "password": "12345"}, "Le mot de passe doit contenir au moins 6 caractères"),
    ],
)
async def test_signup_validation_errors(client: AsyncClient, payload, message):
    response = await client.post(f"{API}/signup", json=payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": message}


async def test_signup_duplicate_email_is_rejected(client: AsyncClient, register):
    account = await register()
    response = await client.post(f"{API}/signup", json={"email": account.email, "password": "secret123"})
    assert response.status_code == 409
    assert response.json()["error"] == "Un compte existe déjà avec cet email"


async def test_login_returns_token_and_profile(client: AsyncClient, register):
    account = await register(business_name="Chez Paul")
    response = await client.post(f"{API}/login", json={"email": account.email, "password": "secret123"})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["id"] == account.id
    assert data["profile"]["business_name"] == "Chez Paul"
    assert data["profile"]["role"] == "user"
    assert "classifieds_session=" in response.headers["set-cookie"]


async def test_login_wrong_password(client: AsyncClient, register):
    account = await register()
    response = await client.post(f"{API}/login", json={"email": account.email, "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["error"] == "Email ou mot de passe incorrect"


@pytest.mark.parametrize("payload", [{"email": "   ", "password": "secret123"}, {"email": "a@example.fr"}])
async def test_login_requires_email_and_password(client: AsyncClient, payload):
    response = await client.post(f"{API}/login", json=payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email et mot de passe requis"}


async def test_me_requires_authentication(client: AsyncClient):
    response = await client.get(f"{API}/me")
    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_me_with_bearer_token(client: AsyncClient, register):
    account = await register()
    response = await client.get(f"{API}/me", headers=account.headers)
    assert response.status_code == 200
    assert response.json()["user"]["email"] == account.email


async def test_me_with_session_cookie(client: AsyncClient, register):
    account = await register()
    response = await client.get(f"{API}/me", headers={"Cookie": f"classifieds_session={account.token}"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == account.id


async def test_invalid_token_is_rejected(client: AsyncClient):
    response = await client.get(f"{API}/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "Session invalide ou expirée"


async def test_verify_email(client: AsyncClient, register):
    account = await register()
    token = issue_email_token(User(id=account.id, email=account.email, password_hash="x"))

    response = await client.post(f"{API}/verify-email", json={"token": token})
    assert response.status_code == 200
    assert response.json()["data"]["email_verified"] is True


async def test_access_token_cannot_verify_email(client: AsyncClient, register):
    account = await register()
    response = await client.post(f"{API}/verify-email", json={"token": account.token})
    assert response.status_code == 401
    assert response.json()["error"] == "Type de jeton non supporté"


async def test_logout_clears_cookie(client: AsyncClient):
    response = await client.post(f"{API}/logout")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert "classifieds_session" in response.headers.get("set-cookie", "")


async def test_banned_status_for_regular_user(client: AsyncClient, register):
    account = await register()
    response = await client.get(f"{API}/banned", headers=account.headers)
    assert response.status_code == 200
    assert response.json() == {"banned": False, "banned_reason": None, "banned_at": None}
