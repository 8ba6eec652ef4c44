"""Favorite I/O models."""

from __future__ import annotations

from pydantic import BaseModel


class FavoriteStatusRead(BaseModel):
    listing_id: str
    is_favorite: bool
