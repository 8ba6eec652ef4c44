"""Listing category entity."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id


class Category(Base, table=True):
    """Category a listing is filed under.

    Table: categories
    """

    __tablename__ = "categories"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(max_length=120)
    slug: str = Field(max_length=120, unique=True, index=True)
    icon: Optional[str] = Field(default=None, max_length=16)
    description: Optional[str] = Field(default=None)
