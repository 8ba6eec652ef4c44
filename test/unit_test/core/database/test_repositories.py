from datetime import timedelta

import pytest
import pytest_asyncio

from classifieds.core.database.base import utc_now
from classifieds.core.database.entities.favorites import Favorite
from classifieds.core.database.entities.listings import Listing
from classifieds.core.database.entities.messages import Message
from classifieds.core.database.entities.reports import Report
from classifieds.core.database.entities.reviews import Review
from classifieds.core.database.entities.seller_profiles import SellerProfile
from classifieds.core.database.entities.users import User
from classifieds.core.database.repositories import build_repos
from classifieds.core.database.seed import category_id

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def alice(repos) -> User:
    user = await repos.users.create(User(email="alice@example.fr", password_hash="x"))
    await repos.profiles.create(SellerProfile(user_id=user.id, business_name="Alice Meubles"))
    return user


@pytest_asyncio.fixture
async def bob(repos) -> User:
    user = await repos.users.create(User(email="bob@example.fr", password_hash="x"))
    await repos.profiles.create(SellerProfile(user_id=user.id, business_name="Bob"))
    return user


async def _listing(repos, owner: User, title: str, **values) -> Listing:
    return await repos.listings.create(
        Listing(
            user_id=owner.id,
            title=title,
            description=values.pop("description", "Annonce de test"),
            category_id=values.pop("category_id", category_id("maison")),
            location_city=values.pop("location_city", "Paris"),
            status=values.pop("status", "published"),
            **values,
        )
    )


class TestCategoryRepository:
    async def test_seeded_categories_are_ordered_by_name(self, repos):
        categories = await repos.categories.list_ordered()
        names = [category.name for category in categories]
        assert len(names) == 10
        assert names == sorted(names)
        assert {category.slug for category in categories} >= {"vehicules", "immobilier", "autres"}

    async def test_by_ids(self, repos):
        found = await repos.categories.by_ids([category_id("mode"), "unknown"])
        assert list(found) == [category_id("mode")]
        assert found[category_id("mode")].name == "Mode"


class TestListingSearch:
    async def test_only_published_listings_are_returned(self, repos, alice):
        await _listing(repos, alice, "Canapé")
        await _listing(repos, alice, "Brouillon", status="draft")
        await _listing(repos, alice, "Ancien", status="expired")

        listings, total = await repos.listings.search()
        assert total == 1
        assert [listing.title for listing in listings] == ["Canapé"]

    async def test_filters(self, repos, alice):
        await _listing(repos, alice, "Table en chêne", price=120, location_city="Lyon", condition="excellent")
        await _listing(repos, alice, "Chaise", price=15, location_city="Lyon")
        await _listing(repos, alice, "Vélo", price=200, category_id=category_id("vehicules"))

        assert (await repos.listings.search(city="Lyon"))[1] == 2
        assert (await repos.listings.search(category_id=category_id("vehicules")))[1] == 1
        assert (await repos.listings.search(min_price=100, max_price=150))[0][0].title == "Table en chêne"
        assert (await repos.listings.search(condition="excellent"))[1] == 1
        assert (await repos.listings.search(search="table"))[1] == 1

    async def test_search_matches_description(self, repos, alice):
        await _listing(repos, alice, "Lot", description="Trois lampes vintage")
        listings, _ = await repos.listings.search(search="VINTAGE")
        assert [listing.title for listing in listings] == ["Lot"]

    async def test_price_sort_puts_missing_prices_last(self, repos, alice):
        await _listing(repos, alice, "Gratuit")
        await _listing(repos, alice, "Cher", price=300)
        await _listing(repos, alice, "Abordable", price=30)

        ascending, _ = await repos.listings.search(sort_by="price_asc")
        descending, _ = await repos.listings.search(sort_by="price_desc")
        assert [listing.title for listing in ascending] == ["Abordable", "Cher", "Gratuit"]
        assert [listing.title for listing in descending] == ["Cher", "Abordable", "Gratuit"]

    async def test_popular_sort_and_pagination(self, repos, alice):
        for views, title in ((5, "Moyen"), (50, "Star"), (0, "Discret")):
            await _listing(repos, alice, title, views_count=views)

        listings, total = await repos.listings.search(sort_by="popular", limit=2)
        assert total == 3
        assert [listing.title for listing in listings] == ["Star", "Moyen"]
        listings, _ = await repos.listings.search(sort_by="popular", limit=2, offset=2)
        assert [listing.title for listing in listings] == ["Discret"]


class TestListingMaintenance:
    async def test_expire_overdue(self, repos, alice, session_maker):
        now = utc_now()
        overdue = await _listing(repos, alice, "Périmée", expires_at=now - timedelta(days=1))
        fresh = await _listing(repos, alice, "Valide", expires_at=now + timedelta(days=1))
        draft = await _listing(repos, alice, "Brouillon", status="draft", expires_at=now - timedelta(days=1))

        assert await repos.listings.expire_overdue(now) == 1

        async with session_maker() as session:
            check = build_repos(session)
            assert (await check.listings.get_by_id(overdue.id)).status == "expired"
            assert (await check.listings.get_by_id(fresh.id)).status == "published"
            assert (await check.listings.get_by_id(draft.id)).status == "draft"

    async def test_increment_views(self, repos, alice, session_maker):
        listing = await _listing(repos, alice, "Lampe")
        await repos.listings.increment_views(listing.id)
        await repos.listings.increment_views(listing.id)

        async with session_maker() as session:
            assert (await build_repos(session).listings.get_by_id(listing.id)).views_count == 2

    async def test_delete_many_cleans_up_references(self, repos, alice, bob, session_maker):
        doomed = await _listing(repos, alice, "Armoire")
        kept = await _listing(repos, alice, "Buffet")
        await repos.favorites.create(Favorite(user_id=bob.id, listing_id=doomed.id))
        await repos.favorites.create(Favorite(user_id=bob.id, listing_id=kept.id))
        await repos.reports.create(Report(listing_id=doomed.id, reported_by=bob.id, reason="spam"))
        message = await repos.messages.create(
            Message(sender_id=bob.id, receiver_id=alice.id, listing_id=doomed.id, message="Disponible ?")
        )
        review = await repos.reviews.create(
            Review(seller_id=alice.id, reviewer_id=bob.id, listing_id=doomed.id, rating=5, comment="Parfait")
        )

        assert await repos.listings.delete_many([doomed.id, "missing"]) == 1
        assert await repos.listings.delete_many([]) == 0

        async with session_maker() as session:
            check = build_repos(session)
            assert await check.listings.get_by_id(doomed.id) is None
            assert await check.listings.get_by_id(kept.id) is not None
            assert [favorite.listing_id for favorite in await check.favorites.list_by_user(bob.id)] == [kept.id]
            assert await check.reports.list_by_status() == []
            assert (await check.messages.get_by_id(message.id)).listing_id is None
            assert (await check.reviews.get_by_id(review.id)).listing_id is None

    async def test_owner_listings_and_status_counts(self, repos, alice, bob):
        await _listing(repos, alice, "Un")
        await _listing(repos, alice, "Deux", status="draft")
        await _listing(repos, bob, "Trois")

        assert [listing.title for listing in await repos.listings.list_by_owner(alice.id)] == ["Deux", "Un"]
        assert [listing.title for listing in await repos.listings.list_by_owner(alice.id, status="draft")] == ["Deux"]
        assert await repos.listings.count_by_status(alice.id) == {"published": 1, "draft": 1}
        assert await repos.listings.count_by_status() == {"published": 2, "draft": 1}


class TestMessageRepository:
    async def test_thread_and_mark_read(self, repos, alice, bob):
        await repos.messages.create(Message(sender_id=bob.id, receiver_id=alice.id, message="Bonjour"))
        await repos.messages.create(Message(sender_id=alice.id, receiver_id=bob.id, message="Oui ?"))
        await repos.messages.create(Message(sender_id=bob.id, receiver_id=alice.id, message="Toujours dispo ?"))

        thread = await repos.messages.thread(alice.id, bob.id)
        assert [message.message for message in thread] == ["Bonjour", "Oui ?", "Toujours dispo ?"]
        assert await repos.messages.unread_count(alice.id) == 2

        changed = await repos.messages.mark_thread_read(alice.id, bob.id)
        assert len(changed) == 2
        assert all(message.sender_id == bob.id for message in changed)
        assert await repos.messages.unread_count(alice.id) == 0
        assert await repos.messages.unread_count(bob.id) == 1
        assert await repos.messages.mark_thread_read(alice.id, bob.id) == []


class TestUserRepository:
    async def test_delete_account_removes_owned_rows(self, repos, alice, bob, session_maker):
        alice_listing = await _listing(repos, alice, "Commode")
        bob_listing = await _listing(repos, bob, "Guitare")
        await repos.favorites.create(Favorite(user_id=bob.id, listing_id=alice_listing.id))
        await repos.favorites.create(Favorite(user_id=alice.id, listing_id=bob_listing.id))
        await repos.messages.create(Message(sender_id=bob.id, receiver_id=alice.id, message="Salut"))
        await repos.reviews.create(Review(seller_id=alice.id, reviewer_id=bob.id, rating=4, comment="Bien"))
        await repos.notification_preferences.get_or_create(alice.id)

        assert await repos.users.delete_account(alice.id) is True
        assert await repos.users.delete_account(alice.id) is False

        async with session_maker() as session:
            check = build_repos(session)
            assert await check.users.get_by_email("alice@example.fr") is None
            assert await check.profiles.get_by_user_id(alice.id) is None
            assert await check.listings.list_by_owner(alice.id) == []
            assert await check.favorites.list_by_user(bob.id) == []
            assert await check.messages.involving(bob.id) == []
            assert await check.notification_preferences.get_by_id(alice.id) is None
            assert await check.listings.get_by_id(bob_listing.id) is not None
            assert await check.users.get_by_email("bob@example.fr") is not None

    async def test_emails_by_id(self, repos, alice, bob):
        assert await repos.users.emails_by_id([alice.id, bob.id, "ghost"]) == {
            alice.id: "alice@example.fr",
            bob.id: "bob@example.fr",
        }


class TestReviewRepository:
    async def test_seller_ids_reviewed_by(self, repos, alice, bob):
        carol = await repos.users.create(User(email="carol@example.fr", password_hash="x"))
        await repos.reviews.create(Review(seller_id=alice.id, reviewer_id=bob.id, rating=2, comment="Moyen"))
        await repos.reviews.create(Review(seller_id=carol.id, reviewer_id=bob.id, rating=5, comment="Top"))
        await repos.reviews.create(Review(seller_id=bob.id, reviewer_id=alice.id, rating=4, comment="Bien"))

        assert sorted(await repos.reviews.seller_ids_reviewed_by(bob.id)) == sorted([alice.id, carol.id])
        assert await repos.reviews.seller_ids_reviewed_by(carol.id) == []


class TestNotificationPreferencesRepository:
    async def test_defaults_are_created_on_first_read(self, repos, alice):
        prefs = await repos.notification_preferences.get_or_create(alice.id)
        assert prefs.email_new_message is True
        assert prefs.email_marketing is False
        assert (await repos.notification_preferences.get_or_create(alice.id)).user_id == alice.id

    async def test_upsert_ignores_unknown_and_empty_values(self, repos, alice):
        prefs = await repos.notification_preferences.upsert(
            alice.id, {"email_marketing": True, "app_new_message": False, "email_new_review": None, "bogus": True}
        )
        assert prefs.email_marketing is True
        assert prefs.app_new_message is False
        assert prefs.email_new_review is True
        assert not hasattr(prefs, "bogus")


class TestSellerProfileRepository:
    async def test_search_filters(self, repos, alice, bob):
        bob_profile = await repos.profiles.get_by_user_id(bob.id)
        bob_profile.banned = True
        await repos.profiles.update(bob_profile)

        profiles, total = await repos.profiles.search(banned=True)
        assert total == 1
        assert profiles[0].user_id == bob.id
        assert (await repos.profiles.search(search="meubles"))[0][0].user_id == alice.id
        assert (await repos.profiles.search(role="admin"))[1] == 0
        assert (await repos.profiles.search())[1] == 2
