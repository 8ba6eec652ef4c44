"""Seller rating aggregation."""

from __future__ import annotations

from typing import Dict, List

from classifieds.core.database.repositories import RepoBundle
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.reviews import ReviewStatsRead

logger = get_logger(__name__)

DEFAULT_RATING = 5.0


def rating_stats(ratings: List[int]) -> ReviewStatsRead:
    """Total, one-decimal average and per-rating distribution (5 to 1)."""
    distribution: Dict[int, int] = {rating: 0 for rating in (5, 4, 3, 2, 1)}
    for rating in ratings:
        if rating in distribution:
            distribution[rating] += 1
    average = f"{sum(ratings) / len(ratings):.1f}" if ratings else f"{DEFAULT_RATING:.1f}"
    return ReviewStatsRead(total_reviews=len(ratings), average_rating=average, rating_distribution=distribution)


async def refresh_seller_rating(repos: RepoBundle, seller_id: str) -> float:
    """Store the seller's current average rating on their profile."""
    ratings = await repos.reviews.ratings_for_seller(seller_id)
    rating = round(sum(ratings) / len(ratings), 2) if ratings else DEFAULT_RATING
    profile = await repos.profiles.get_by_user_id(seller_id)
    if profile is not None and profile.rating != rating:
        profile.rating = rating
        await repos.profiles.update(profile)
        logger.debug(f"Seller {seller_id} rating is now {rating}")
    return rating
