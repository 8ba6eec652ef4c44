import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1/admin/users"


async def test_user_table_filters(client: AsyncClient, admin, seller, buyer):
    response = await client.get(API, headers=admin.headers)
    page = response.json()
    assert page["total"] == 3
    assert page["current_page"] == 1
    assert {user["email"] for user in page["users"]} == {admin.email, seller.email, buyer.email}

    response = await client.get(API, params={"role": "admin"}, headers=admin.headers)
    assert [user["user_id"] for user in response.json()["users"]] == [admin.id]

    response = await client.get(API, params={"search": "vélos"}, headers=admin.headers)
    assert [user["user_id"] for user in response.json()["users"]] == [seller.id]

    response = await client.get(API, params={"verified": "verified"}, headers=admin.headers)
    assert response.json()["total"] == 0


async def test_banning_a_user_prevents_further_login(client: AsyncClient, admin, buyer):
    response = await client.post(f"{API}/{buyer.id}/ban", json={"reason": "Spam"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["data"]["banned"] is True
    assert response.json()["data"]["banned_reason"] == "Spam"

    response = await client.post("/api/v1/auth/login", json={"email": buyer.email, "password": "secret123"})
    assert response.status_code == 403
    assert response.json()["error"] == "Votre compte a été suspendu"

    # Existing sessions are refused too, except on the suspension page
    response = await client.get("/api/v1/favorites", headers=buyer.headers)
    assert response.status_code == 403
    response = await client.get("/api/v1/auth/banned", headers=buyer.headers)
    assert response.json()["banned"] is True
    assert response.json()["banned_reason"] == "Spam"

    response = await client.get(API, params={"banned": "banned"}, headers=admin.headers)
    assert [user["user_id"] for user in response.json()["users"]] == [buyer.id]

    response = await client.post(f"{API}/{buyer.id}/unban", headers=admin.headers)
    assert response.json()["data"]["banned"] is False
    response = await client.post("/api/v1/auth/login", json={"email": buyer.email, "password": "secret123"})
    assert response.status_code == 200


async def test_admin_cannot_ban_or_demote_themselves(client: AsyncClient, admin):
    response = await client.post(f"{API}/{admin.id}/ban", json={"reason": "Test"}, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Vous ne pouvez pas vous bannir vous-même"

    response = await client.put(f"{API}/{admin.id}/role", json={"role": "user"}, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Vous ne pouvez pas vous retirer le rôle admin"

    response = await client.delete(f"{API}/{admin.id}", headers=admin.headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Vous ne pouvez pas supprimer votre propre compte"


async def test_change_role_and_verified_badge(client: AsyncClient, admin, seller):
    response = await client.put(f"{API}/{seller.id}/role", json={"role": "admin"}, headers=admin.headers)
    assert response.json()["data"]["role"] == "admin"
    # The promoted user can now reach the admin area
    assert (await client.get(API, headers=seller.headers)).status_code == 200

    response = await client.put(f"{API}/{seller.id}/verified", json={"verified": True}, headers=admin.headers)
    assert response.json()["data"]["verified"] is True

    response = await client.get(f"{API}/{seller.id}/logs", headers=admin.headers)
    details = {log["action"]: log["details"] for log in response.json()}
    assert details["change_role"] == "Role: user -> admin"
    assert details["toggle_verified"] == "Verified: True"


async def test_unknown_user(client: AsyncClient, admin):
    response = await client.post(f"{API}/missing/ban", json={"reason": "Spam"}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Utilisateur introuvable"
    assert (await client.delete(f"{API}/missing", headers=admin.headers)).status_code == 404


async def test_user_stats_and_listings(client: AsyncClient, admin, seller, buyer, create_listing):
    listing = await create_listing(seller)
    await create_listing(seller, publish=False)
    await client.get(f"/api/v1/listings/{listing['id']}", headers=buyer.headers)
    await client.post("/api/v1/messages", json={"receiver_id": buyer.id, "message": "Bonjour"}, headers=seller.headers)
    await client.post(f"/api/v1/favorites/{listing['id']}", headers=buyer.headers)

    response = await client.get(f"{API}/{seller.id}/stats", headers=admin.headers)
    assert response.json() == {
        "listings_count": 2,
        "published_count": 1,
        "messages_sent": 1,
        "messages_received": 0,
        "favorites_count": 0,
        "total_views": 1,
    }

    response = await client.get(f"{API}/{seller.id}/listings", params={"limit": 1}, headers=admin.headers)
    assert len(response.json()) == 1


async def test_delete_user_removes_everything(client: AsyncClient, admin, seller, buyer, create_listing, storage):
    upload = await client.post(
        "/api/v1/listings/images",
        files={"file": ("photo.jpg", b"\xff\xd8\xff" + b"\x00" * 32, "image/jpeg")},
        headers=seller.headers,
    )
    image = upload.json()["data"]
    listing = await create_listing(seller, images=[image["url"]])
    await client.post("/api/v1/messages", json={"receiver_id": seller.id, "message": "Bonjour"}, headers=buyer.headers)
    await client.post(f"/api/v1/favorites/{listing['id']}", headers=buyer.headers)

    response = await client.delete(f"{API}/{seller.id}", headers=admin.headers)
    assert response.status_code == 200

    assert not (storage.root / image["path"]).exists()
    assert (await client.get(f"/api/v1/profiles/{seller.id}")).status_code == 404
    assert (await client.get(f"/api/v1/listings/{listing['id']}")).status_code == 404
    assert (await client.get("/api/v1/favorites/count", headers=buyer.headers)).json() == {"count": 0}
    assert (await client.get("/api/v1/messages/conversations", headers=buyer.headers)).json() == []
    response = await client.post("/api/v1/auth/login", json={"email": seller.email, "password": "secret123"})
    assert response.status_code == 401

    logs = (await client.get(f"{API}/{seller.id}/logs", headers=admin.headers)).json()
    assert [log["details"] for log in logs if log["action"] == "delete_user"] == [f"Email: {seller.email}"]


async def test_ban_details_are_always_logged(client: AsyncClient, admin, seller, buyer):
    await client.post(f"{API}/{buyer.id}/ban", json={"reason": "Spam"}, headers=admin.headers)
    await client.post(
        f"{API}/{seller.id}/ban", json={"reason": "Fraude", "details": "Faux paiements"}, headers=admin.headers
    )

    buyer_logs = (await client.get(f"{API}/{buyer.id}/logs", headers=admin.headers)).json()
    assert [log["details"] for log in buyer_logs if log["action"] == "ban_user"] == ["Reason: Spam. Details: None"]
    seller_logs = (await client.get(f"{API}/{seller.id}/logs", headers=admin.headers)).json()
    assert [log["details"] for log in seller_logs if log["action"] == "ban_user"] == [
        "Reason: Fraude. Details: Faux paiements"
    ]


async def test_deleting_a_reviewer_refreshes_seller_rating(client: AsyncClient, admin, seller, buyer, register):
    critic = await register(business_name="Critique")
    for reviewer, rating in ((buyer, 5), (critic, 1)):
        response = await client.post(
            "/api/v1/reviews",
            json={"seller_id": seller.id, "rating": rating, "comment": "Avis"},
            headers=reviewer.headers,
        )
        assert response.status_code == 201, response.text
    assert (await client.get(f"/api/v1/profiles/{seller.id}")).json()["rating"] == 3.0

    response = await client.delete(f"{API}/{critic.id}", headers=admin.headers)
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/profiles/{seller.id}")).json()["rating"] == 5.0
    stats = (await client.get(f"/api/v1/reviews/seller/{seller.id}/stats")).json()
    assert stats["total_reviews"] == 1
    assert stats["average_rating"] == "5.0"
