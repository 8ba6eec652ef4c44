"""Domain enums shared by entities, I/O models and routers."""

from .enums import (
    ListingCondition,
    ListingStatus,
    MessageEventType,
    ReportStatus,
    SortOption,
    UserRole,
    VerificationStatus,
)

__all__ = [
    "ListingCondition",
    "ListingStatus",
    "MessageEventType",
    "ReportStatus",
    "SortOption",
    "UserRole",
    "VerificationStatus",
]
