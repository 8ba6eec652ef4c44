"""Classifieds marketplace.

This package contains a French-language classified-ads marketplace: sellers
publish listings, buyers browse, favorite and contact sellers, leave reviews,
and administrators moderate the whole thing.

High-level architecture
-----------------------

The codebase is organized as thin request handlers over a relational database:

- **Entities** (``classifieds.core.database.entities``): SQLModel tables owned
  by the Alembic migrations.
- **Repositories** (``classifieds.core.database.repositories``): async query
  wrappers, one per table.
- **I/O models** (``classifieds.core.models.io``): request/response contracts,
  kept separate from the entities.
- **Routers** (``classifieds.server.api.v1``): FastAPI endpoints that validate
  input, check ownership or admin rights, call repositories and, for admin
  actions, append an audit row to ``admin_logs``.

Core subpackages
----------------

- ``classifieds.core``: logging, monitoring, security helpers, errors and the
  database layer.
- ``classifieds.server``: the FastAPI application, configuration, services
  (image storage, live message feed, CSV export, analytics) and routers.
"""
