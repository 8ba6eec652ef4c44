"""
Database entity models.

Each module holds one table of the marketplace:

- users: Accounts (email and password hash)
- seller_profiles: Public seller identity, role, verification and ban flags
- categories: Listing categories
- listings: Classified ads
- messages: Direct messages between users
- favorites: Saved listings
- reviews: Seller ratings
- verification_requests: Seller verification workflow
- admin_logs: Admin audit trail
- reports: Listing abuse reports
- notification_preferences: Notification switches per user
"""

from .admin_logs import AdminLog
from .categories import Category
from .favorites import Favorite
from .listings import Listing
from .messages import Message
from .notification_preferences import NotificationPreferences
from .reports import Report
from .reviews import Review
from .seller_profiles import SellerProfile
from .users import User
from .verification_requests import VerificationRequest

__all__ = [
    "AdminLog",
    "Category",
    "Favorite",
    "Listing",
    "Message",
    "NotificationPreferences",
    "Report",
    "Review",
    "SellerProfile",
    "User",
    "VerificationRequest",
]
