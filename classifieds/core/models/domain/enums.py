"""Domain enums for marketplace models."""

from __future__ import annotations

from enum import Enum


class ListingStatus(str, Enum):
    """
    Lifecycle status of a listing.

    Only ``published`` listings are visible to other users.
    """

    draft = "draft"
    published = "published"
    expired = "expired"  # Set once ``expires_at`` has passed.
    deleted = "deleted"


class ListingCondition(str, Enum):
    """Condition of the item offered in a listing."""

    new = "new"
    excellent = "excellent"
    good = "good"
    fair = "fair"


class UserRole(str, Enum):
    """Marketplace role stored on the seller profile."""

    user = "user"
    admin = "admin"


class VerificationStatus(str, Enum):
    """Outcome of a seller verification request."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ReportStatus(str, Enum):
    """Triage status of a listing report."""

    pending = "pending"
    reviewed = "reviewed"
    resolved = "resolved"
    dismissed = "dismissed"


class SortOption(str, Enum):
    """Sort orders accepted by the listing search."""

    recent = "recent"
    popular = "popular"
    price_asc = "price_asc"
    price_desc = "price_desc"


class MessageEventType(str, Enum):
    """Kinds of live message events pushed to subscribers."""

    insert = "INSERT"  # A new message was sent to the subscriber.
    update = "UPDATE"  # A message the subscriber sent was read.
