"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: ActionResult envelope and shared small models
- auth: Signup, login and current user
- profiles: Seller profiles
- listings: Listings, categories, search, uploads and bulk delete
- messages: Messages, conversations and live events
- favorites: Favorite status
- reviews: Reviews and rating statistics
- verification: Verification requests and notification preferences
- admin: Moderation, users, reports and analytics
"""

from .common import ActionResult, CountRead, ErrorResponse

__all__ = ["ActionResult", "CountRead", "ErrorResponse"]
