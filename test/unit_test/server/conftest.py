from dataclasses import dataclass
from typing import AsyncGenerator, Awaitable, Callable, Dict, Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.database.repositories import build_repos
from classifieds.core.database.seed import category_id
from classifieds.server.services.realtime import MessageBroker
from classifieds.server.services.storage import ImageStorage

API = "/api/v1"
DEFAULT_PASSWORD = "secret123"


@dataclass
class Account:
    """A signed-up user with a valid access token."""

    id: str
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def storage(tmp_path) -> ImageStorage:
    return ImageStorage(tmp_path / "media", "/media/listings", 5 * 1024 * 1024)


@pytest.fixture
def broker() -> MessageBroker:
    return MessageBroker()


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_maker, storage, broker) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from classifieds.core.database.session import get_session
    from classifieds.server.main import app
    from classifieds.server.services.realtime import get_broker
    from classifieds.server.services.storage import get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_broker] = lambda: broker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient, session_maker) -> Callable[..., Awaitable[Account]]:
    """Sign up and log in a user; ``role="admin"`` promotes them first."""

    async def _register(
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        business_name: Optional[str] = "Boutique Test",
        role: str = "user",
    ) -> Account:
        email = email or f"user-{uuid4().hex[:8]}@example.fr"
        response = await client.post(
            f"{API}/auth/signup", json={"email": email, "password": password, "business_name": business_name}
        )
        assert response.status_code == 201, response.text
        user_id = response.json()["data"]["id"]

        if role != "user":
            async with session_maker() as session:
                repos = build_repos(session)
                profile = await repos.profiles.get_by_user_id(user_id)
                profile.role = role
                await repos.profiles.update(profile)

        response = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        # Requests authenticate explicitly with the bearer header
        client.cookies.clear()
        return Account(id=user_id, email=email, token=response.json()["access_token"])

    return _register


@pytest_asyncio.fixture
async def seller(register) -> Account:
    return await register(business_name="Vélos Dupont")


@pytest_asyncio.fixture
async def buyer(register) -> Account:
    return await register(business_name="Acheteur")


@pytest_asyncio.fixture
async def admin(register) -> Account:
    return await register(business_name="Modération", role="admin")


@pytest.fixture
def create_listing(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """Create a listing through the API, published unless ``publish=False``."""

    async def _create(owner: Account, publish: bool = True, **overrides) -> dict:
        payload = {
            "title": "Vélo de course",
            "description": "Très bon état, peu servi.",
            "category_id": category_id("vehicules"),
            "price": 250.0,
            "location_city": "Lyon",
            "condition": "excellent",
        }
        payload.update(overrides)
        response = await client.post(f"{API}/listings", json=payload, headers=owner.headers)
        assert response.status_code == 201, response.text
        listing = response.json()["data"]
        if publish:
            response = await client.post(f"{API}/listings/{listing['id']}/publish", headers=owner.headers)
            assert response.status_code == 200, response.text
            listing = response.json()["data"]
        return listing

    return _create
