"""
CSV exports for the admin area.

Headers and values are French. Booleans become ``Oui``/``Non`` and dates the
``dd/mm/yyyy`` form. Fields containing a comma, a quote or a line break are
quoted with doubled inner quotes.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from classifieds.core.database.base import utc_now
from classifieds.core.database.repositories import RepoBundle

USER_HEADERS = ["ID", "Email", "Nom Commercial", "Rôle", "Vérifié", "Banni", "Ville", "Note", "Date Inscription"]
LISTING_HEADERS = ["ID", "Titre", "Catégorie", "Prix", "Statut", "Ville", "Vues", "Vendeur", "Date Création"]

LISTING_EXPORT_LIMIT = 1000


def format_fr_date(value: Optional[datetime | date]) -> str:
    """Format a date the way ``toLocaleDateString('fr-FR')`` does."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def yes_no(value: bool) -> str:
    return "Oui" if value else "Non"


def to_csv(rows: Iterable[Mapping[str, Any]], headers: Sequence[str]) -> str:
    """Render ``rows`` as CSV with a header line and ``\\n`` line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row.get(header) is None else row.get(header) for header in headers])
    return buffer.getvalue().rstrip("\n")


def export_filename(prefix: str, today: Optional[date] = None) -> str:
    today = today or utc_now().date()
    return f"{prefix}_{today.isoformat()}.csv"


async def export_users(repos: RepoBundle) -> str:
    """All seller profiles with their account email, newest first."""
    profiles, _ = await repos.profiles.search(limit=None)
    emails = await repos.users.emails_by_id(profile.user_id for profile in profiles)
    rows: List[dict] = [
        {
            "ID": profile.user_id,
            "Email": emails.get(profile.user_id, "N/A"),
            "Nom Commercial": profile.business_name or "",
            "Rôle": profile.role,
            "Vérifié": yes_no(profile.verified),
            "Banni": yes_no(profile.banned),
            "Ville": profile.city or "",
            "Note": profile.rating,
            "Date Inscription": format_fr_date(profile.created_at),
        }
        for profile in profiles
    ]
    return to_csv(rows, USER_HEADERS)


async def export_listings(repos: RepoBundle) -> str:
    """The newest listings (at most ``LISTING_EXPORT_LIMIT``) in any status."""
    listings, _ = await repos.listings.list_for_moderation(limit=LISTING_EXPORT_LIMIT)
    categories = await repos.categories.by_ids(listing.category_id for listing in listings)
    profiles = await repos.profiles.by_user_ids(listing.user_id for listing in listings)
    rows: List[dict] = []
    for listing in listings:
        category = categories.get(listing.category_id)
        profile = profiles.get(listing.user_id)
        rows.append(
            {
                "ID": listing.id,
                "Titre": listing.title,
                "Catégorie": category.name if category else "",
                "Prix": listing.price,
                "Statut": "Publié" if listing.status == "published" else "Brouillon",
                "Ville": listing.location_city,
                "Vues": listing.views_count,
                "Vendeur": (profile.business_name or "") if profile else "",
                "Date Création": format_fr_date(listing.created_at),
            }
        )
    return to_csv(rows, LISTING_HEADERS)
