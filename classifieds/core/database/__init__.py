"""
Centralized database layer.

- base: SQLModel base class and id/timestamp helpers
- entities: One SQLModel table per module
- repositories: Async data access per table
- session: Global engine, session factory and FastAPI session dependency
- utils: Engine/session factories, ``create_all`` and category seeding
- seed: Default category list shared with the initial migration
"""

from .base import Base, new_id, utc_now

__all__ = ["Base", "new_id", "utc_now"]
