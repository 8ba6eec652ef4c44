import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1/settings/notifications"


async def test_defaults_are_created_on_first_read(client: AsyncClient, seller):
    response = await client.get(API, headers=seller.headers)
    assert response.status_code == 200
    prefs = response.json()
    assert prefs["user_id"] == seller.id
    assert prefs["email_new_message"] is True
    assert prefs["email_marketing"] is False
    assert prefs["app_listing_update"] is True


async def test_partial_update_keeps_other_switches(client: AsyncClient, seller):
    response = await client.put(API, json={"email_marketing": True, "app_new_message": False}, headers=seller.headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    prefs = (await client.get(API, headers=seller.headers)).json()
    assert prefs["email_marketing"] is True
    assert prefs["app_new_message"] is False
    assert prefs["email_new_review"] is True

    await client.put(API, json={"email_new_review": False}, headers=seller.headers)
    prefs = (await client.get(API, headers=seller.headers)).json()
    assert prefs["email_marketing"] is True
    assert prefs["email_new_review"] is False


async def test_requires_authentication(client: AsyncClient):
    assert (await client.get(API)).status_code == 401
