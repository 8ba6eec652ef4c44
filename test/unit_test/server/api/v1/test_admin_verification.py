import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1/admin/verification"


async def _submit(client: AsyncClient, account) -> dict:
    response = await client.post(
        "/api/v1/verification",
        json={"business_name": "Vélos Dupont SARL", "phone": "04 78 00 00 00"},
        headers=account.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_list_requests_with_email(client: AsyncClient, admin, seller):
    request = await _submit(client, seller)

    response = await client.get(API, headers=admin.headers)
    assert response.status_code == 200
    rows = response.json()
    assert [row["id"] for row in rows] == [request["id"]]
    assert rows[0]["user_email"] == seller.email

    response = await client.get(API, params={"status": "approved"}, headers=admin.headers)
    assert response.json() == []


async def test_approve_marks_profile_verified(client: AsyncClient, admin, seller):
    request = await _submit(client, seller)

    response = await client.post(f"{API}/{request['id']}/approve", headers=admin.headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "approved"
    assert data["reviewed_by"] == admin.id
    assert data["reviewed_at"] is not None

    profile = (await client.get(f"/api/v1/profiles/{seller.id}")).json()
    assert profile["verified"] is True

    logs = (await client.get(f"/api/v1/admin/users/{seller.id}/logs", headers=admin.headers)).json()
    assert [log["action"] for log in logs] == ["approve_verification"]


async def test_reject_keeps_profile_unverified(client: AsyncClient, admin, seller):
    request = await _submit(client, seller)

    response = await client.post(f"{API}/{request['id']}/reject", json={"reason": "Documents illisibles"}, headers=admin.headers)
    data = response.json()["data"]
    assert data["status"] == "rejected"
    assert data["rejection_reason"] == "Documents illisibles"
    assert (await client.get(f"/api/v1/profiles/{seller.id}")).json()["verified"] is False

    # A rejected request no longer blocks a new one
    await _submit(client, seller)


async def test_unknown_request(client: AsyncClient, admin):
    response = await client.post(f"{API}/missing/approve", headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Demande introuvable"


async def test_verification_admin_only(client: AsyncClient, seller):
    assert (await client.get(API, headers=seller.headers)).status_code == 403
