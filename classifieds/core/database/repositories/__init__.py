"""
Database repository layer using SQLModel.

One repository per table, all built on ``SqlRepository`` for the shared CRUD
operations, plus ``RepoBundle`` to hand the whole set to request handlers.

Modules:
- base: TableRepository contract, SqlRepository and QueryBuilder utilities
- bundle: RepoBundle and build_repos
- one module per table (users, seller_profiles, categories, listings, ...)
"""

from .bundle import RepoBundle, build_repos

__all__ = ["RepoBundle", "build_repos"]
