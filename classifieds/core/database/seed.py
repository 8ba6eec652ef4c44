"""
Seed data for the marketplace.

The category list is shared by the initial Alembic migration and by
``init_db`` when tables are created for local development. Category ids are
derived from the slug so both paths produce the same rows.
"""

from __future__ import annotations

import uuid
from typing import Dict, List

CATEGORY_NAMESPACE = uuid.UUID("6f1c2d0e-8a4b-4c1f-9e3a-2b7d5c8e1a90")


def category_id(slug: str) -> str:
    """Return the stable id of a seeded category."""
    return str(uuid.uuid5(CATEGORY_NAMESPACE, slug))


_CATEGORIES = [
    ("Véhicules", "vehicules", "🚗", "Voitures, motos, vélos et équipements"),
    ("Immobilier", "immobilier", "🏠", "Ventes, locations et colocations"),
    ("Multimédia", "multimedia", "💻", "Informatique, téléphonie, image et son"),
    ("Maison", "maison", "🛋️", "Ameublement, électroménager et décoration"),
    ("Mode", "mode", "👗", "Vêtements, chaussures, montres et bijoux"),
    ("Loisirs", "loisirs", "🎸", "Sports, musique, livres et jeux"),
    ("Enfants", "enfants", "🧸", "Jouets, puériculture et vêtements enfants"),
    ("Emploi", "emploi", "💼", "Offres d'emploi et services"),
    ("Animaux", "animaux", "🐾", "Animaux et accessoires"),
    ("Autres", "autres", "📦", "Tout le reste"),
]

DEFAULT_CATEGORIES: List[Dict[str, str]] = [
    {"id": category_id(slug), "name": name, "slug": slug, "icon": icon, "description": description}
    for name, slug, icon, description in _CATEGORIES
]
