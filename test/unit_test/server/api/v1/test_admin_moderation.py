from datetime import timedelta

import pytest
from httpx import AsyncClient

from classifieds.core.database.base import utc_now
from classifieds.core.database.repositories import build_repos

pytestmark = pytest.mark.asyncio

API = "/api/v1/admin/moderation"


async def _actions(client: AsyncClient, admin, target_id: str) -> dict:
    response = await client.get(f"{API}/listings/{target_id}/logs", headers=admin.headers)
    assert response.status_code == 200
    return {log["action"]: log for log in response.json()}


async def test_moderation_table_filters(client: AsyncClient, admin, seller, create_listing):
    await create_listing(seller, title="Vélo publié")
    await create_listing(seller, publish=False, title="Canapé brouillon")

    response = await client.get(f"{API}/listings", headers=admin.headers)
    page = response.json()
    assert page["total"] == 2
    assert page["pages"] == 1
    assert page["current_page"] == 1

    response = await client.get(f"{API}/listings", params={"status": "draft"}, headers=admin.headers)
    assert [item["title"] for item in response.json()["listings"]] == ["Canapé brouillon"]

    response = await client.get(f"{API}/listings", params={"status": "all", "search": "vélo"}, headers=admin.headers)
    assert [item["title"] for item in response.json()["listings"]] == ["Vélo publié"]


async def test_moderation_is_admin_only(client: AsyncClient, seller):
    response = await client.get(f"{API}/listings", headers=seller.headers)
    assert response.status_code == 403


async def test_approve_reject_and_flag_are_logged(client: AsyncClient, admin, seller, create_listing):
    listing = await create_listing(seller, publish=False)
    listing_id = listing["id"]

    response = await client.post(f"{API}/listings/{listing_id}/approve", headers=admin.headers)
    assert response.json()["data"]["status"] == "published"

    response = await client.post(f"{API}/listings/{listing_id}/reject", headers=admin.headers)
    assert response.json()["data"]["status"] == "draft"

    response = await client.post(
        f"{API}/listings/{listing_id}/flag", json={"reason": "Contenu interdit"}, headers=admin.headers
    )
    assert response.json()["data"]["status"] == "draft"

    actions = await _actions(client, admin, listing_id)
    assert set(actions) == {"approve_listing", "reject_listing", "flag_listing"}
    assert actions["reject_listing"]["details"] == "No reason provided"
    assert actions["flag_listing"]["details"] == "Reason: Contenu interdit. Details: None"
    assert actions["approve_listing"]["admin_name"] == "Modération"
    assert actions["approve_listing"]["target_type"] == "listing"


async def test_reject_with_reason(client: AsyncClient, admin, seller, create_listing):
    listing = await create_listing(seller)
    await client.post(f"{API}/listings/{listing['id']}/reject", json={"reason": "Photos floues"}, headers=admin.headers)
    actions = await _actions(client, admin, listing["id"])
    assert actions["reject_listing"]["details"] == "Photos floues"


async def test_admin_delete_listing(client: AsyncClient, admin, seller, create_listing):
    listing = await create_listing(seller, title="Annonce interdite")

    response = await client.delete(f"{API}/listings/{listing['id']}", headers=admin.headers)
    assert response.status_code == 200
    assert (await client.get(f"{API}/listings/{listing['id']}", headers=admin.headers)).status_code == 404

    actions = await _actions(client, admin, listing["id"])
    assert actions["delete_listing"]["details"] == "Title: Annonce interdite"


async def test_admin_can_view_any_listing(client: AsyncClient, admin, seller, create_listing):
    listing = await create_listing(seller, publish=False)
    response = await client.get(f"{API}/listings/{listing['id']}", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["status"] == "draft"


async def test_reports_workflow(client: AsyncClient, admin, seller, buyer, create_listing):
    listing = await create_listing(seller)
    response = await client.post(
        f"/api/v1/listings/{listing['id']}/report", json={"reason": "Arnaque"}, headers=buyer.headers
    )
    report_id = response.json()["data"]["id"]

    response = await client.get(f"{API}/reports", params={"status": "pending"}, headers=admin.headers)
    assert [report["id"] for report in response.json()] == [report_id]

    response = await client.patch(f"{API}/reports/{report_id}", json={"status": "resolved"}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "resolved"

    assert (await client.get(f"{API}/reports", params={"status": "pending"}, headers=admin.headers)).json() == []
    assert len((await client.get(f"{API}/reports", headers=admin.headers)).json()) == 1

    response = await client.patch(f"{API}/reports/missing", json={"status": "resolved"}, headers=admin.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Signalement introuvable"


async def test_expire_listings(client: AsyncClient, admin, seller, create_listing, session_maker):
    overdue = await create_listing(seller)
    current = await create_listing(seller)

    async with session_maker() as session:
        repos = build_repos(session)
        listing = await repos.listings.get_by_id(overdue["id"])
        listing.expires_at = utc_now() - timedelta(days=1)
        await repos.listings.update(listing)

    response = await client.post(f"{API}/maintenance/expire-listings", headers=admin.headers)
    assert response.json() == {"expired": 1}

    assert (await client.get(f"/api/v1/listings/{overdue['id']}", headers=seller.headers)).json()["status"] == "expired"
    assert (await client.get(f"/api/v1/listings/{current['id']}", headers=seller.headers)).json()["status"] == "published"
    assert (await client.get("/api/v1/listings")).json()["count"] == 1
