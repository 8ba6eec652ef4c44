import pytest
from sqlalchemy.exc import IntegrityError

from classifieds.core.database.entities import (
    Favorite,
    Listing,
    Message,
    Report,
    Review,
    SellerProfile,
    User,
    VerificationRequest,
)
from classifieds.core.database.seed import DEFAULT_CATEGORIES, category_id


class TestDefaults:
    def test_listing(self):
        listing = Listing(user_id="u1", title="Vélo", description="Bon état", category_id="c1", location_city="Lyon")
        assert listing.status == "draft"
        assert listing.condition == "good"
        assert listing.currency == "EUR"
        assert listing.images == []
        assert listing.views_count == 0
        assert listing.price is None
        assert listing.expires_at is None
        assert len(listing.id) == 36
        assert listing.created_at.tzinfo is not None

    def test_seller_profile(self):
        profile = SellerProfile(user_id="u1")
        assert profile.rating == 5.0
        assert profile.role == "user"
        assert profile.verified is False
        assert profile.banned is False

    def test_status_fields(self):
        assert Message(sender_id="a", receiver_id="b", message="Salut").read is False
        assert Report(listing_id="l1", reported_by="u1", reason="spam").status == "pending"
        assert VerificationRequest(user_id="u1", business_name="Dupont", phone="0600000000").status == "pending"

    def test_ids_are_unique(self):
        assert User(email="a@example.fr", password_hash="x").id != User(email="b@example.fr", password_hash="x").id


def test_category_ids_are_stable():
    assert category_id("mode") == category_id("mode")
    assert category_id("mode") != category_id("maison")
    assert {row["id"] for row in DEFAULT_CATEGORIES} == {category_id(row["slug"]) for row in DEFAULT_CATEGORIES}


@pytest.mark.asyncio
class TestConstraints:
    async def _users(self, repos):
        seller = await repos.users.create(User(email="vendeur@example.fr", password_hash="x"))
        buyer = await repos.users.create(User(email="acheteur@example.fr", password_hash="x"))
        return seller, buyer

    async def test_favorite_is_unique_per_user_and_listing(self, repos):
        seller, buyer = await self._users(repos)
        listing = await repos.listings.create(
            Listing(
                user_id=seller.id,
                title="Lampe",
                description="Vintage",
                category_id=category_id("maison"),
                location_city="Nantes",
            )
        )
        await repos.favorites.create(Favorite(user_id=buyer.id, listing_id=listing.id))
        with pytest.raises(IntegrityError):
            await repos.favorites.create(Favorite(user_id=buyer.id, listing_id=listing.id))

    async def test_review_is_unique_per_reviewer_and_seller(self, repos):
        seller, buyer = await self._users(repos)
        await repos.reviews.create(Review(seller_id=seller.id, reviewer_id=buyer.id, rating=5, comment="Top"))
        with pytest.raises(IntegrityError):
            await repos.reviews.create(Review(seller_id=seller.id, reviewer_id=buyer.id, rating=1, comment="Bof"))

    async def test_email_is_unique(self, repos):
        await repos.users.create(User(email="vendeur@example.fr", password_hash="x"))
        with pytest.raises(IntegrityError):
            await repos.users.create(User(email="vendeur@example.fr", password_hash="y"))
