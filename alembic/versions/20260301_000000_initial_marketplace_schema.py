"""Initial marketplace schema and seed data

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables of the classifieds
marketplace and seeds the default categories. This includes:
- Accounts and seller profiles
- Categories and listings
- Messages, favorites and reviews
- Seller verification requests and notification preferences
- Admin audit log and listing reports

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from classifieds.core.database.seed import DEFAULT_CATEGORIES

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(36)


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    """Create all tables and seed the categories."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", ID, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("password_hash", sa.String(), nullable=False),
        _timestamp("created_at"),
        _timestamp("last_sign_in_at", nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create seller_profiles table
    op.create_table(
        "seller_profiles",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("business_name", sa.String(255), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("whatsapp", sa.String(50), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False, server_default="5.0"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("banned_reason", sa.String(), nullable=True),
        _timestamp("banned_at", nullable=True),
        sa.Column("banned_by", ID, nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_seller_profiles_user_id", "seller_profiles", ["user_id"], unique=True)
    op.create_index("ix_seller_profiles_banned", "seller_profiles", ["banned"])

    # Create categories table
    op.create_table(
        "categories",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("slug", sa.String(120), nullable=False),
        sa.Column("icon", sa.String(16), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"], unique=True)

    # Create listings table
    op.create_table(
        "listings",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("category_id", ID, nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="EUR"),
        sa.Column("location_city", sa.String(120), nullable=False),
        sa.Column("condition", sa.String(20), nullable=False, server_default="good"),
        sa.Column("images", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _timestamp("expires_at", nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_listings_user_id", "listings", ["user_id"])
    op.create_index("ix_listings_category_id", "listings", ["category_id"])
    op.create_index("ix_listings_location_city", "listings", ["location_city"])
    op.create_index("ix_listings_status", "listings", ["status"])
    op.create_index("ix_listings_created_at", "listings", ["created_at"])

    # Create messages table
    op.create_table(
        "messages",
        sa.Column("id", ID, nullable=False),
        sa.Column("sender_id", ID, nullable=False),
        sa.Column("receiver_id", ID, nullable=False),
        sa.Column("listing_id", ID, nullable=True),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])
    op.create_index("ix_messages_receiver_id", "messages", ["receiver_id"])
    op.create_index("ix_messages_created_at", "messages", ["created_at"])

    # Create favorites table
    op.create_table(
        "favorites",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("listing_id", ID, nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "listing_id", name="uq_favorites_user_listing"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_listing_id", "favorites", ["listing_id"])

    # Create reviews table
    op.create_table(
        "reviews",
        sa.Column("id", ID, nullable=False),
        sa.Column("seller_id", ID, nullable=False),
        sa.Column("reviewer_id", ID, nullable=False),
        sa.Column("listing_id", ID, nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("comment", sa.String(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reviewer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reviewer_id", "seller_id", name="uq_reviews_reviewer_seller"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_seller_id", "reviews", ["seller_id"])
    op.create_index("ix_reviews_reviewer_id", "reviews", ["reviewer_id"])
    op.create_index("ix_reviews_created_at", "reviews", ["created_at"])

    # Create verification_requests table
    op.create_table(
        "verification_requests",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("business_type", sa.String(100), nullable=True),
        sa.Column("business_registration", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("id_document_url", sa.String(), nullable=True),
        sa.Column("business_document_url", sa.String(), nullable=True),
        sa.Column("proof_of_address_url", sa.String(), nullable=True),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("reviewed_by", ID, nullable=True),
        _timestamp("reviewed_at", nullable=True),
        sa.Column("rejection_reason", sa.String(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_verification_requests_user_id", "verification_requests", ["user_id"])
    op.create_index("ix_verification_requests_status", "verification_requests", ["status"])
    op.create_index("ix_verification_requests_created_at", "verification_requests", ["created_at"])

    # Create admin_logs table
    op.create_table(
        "admin_logs",
        sa.Column("id", ID, nullable=False),
        sa.Column("admin_id", ID, nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("target_id", ID, nullable=True),
        sa.Column("target_type", sa.String(30), nullable=True),
        sa.Column("details", sa.String(), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_logs_admin_id", "admin_logs", ["admin_id"])
    op.create_index("ix_admin_logs_action", "admin_logs", ["action"])
    op.create_index("ix_admin_logs_target_id", "admin_logs", ["target_id"])
    op.create_index("ix_admin_logs_created_at", "admin_logs", ["created_at"])

    # Create reports table
    op.create_table(
        "reports",
        sa.Column("id", ID, nullable=False),
        sa.Column("listing_id", ID, nullable=False),
        sa.Column("reported_by", ID, nullable=False),
        sa.Column("reason", sa.String(100), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reported_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reports_listing_id", "reports", ["listing_id"])
    op.create_index("ix_reports_status", "reports", ["status"])

    # Create notification_preferences table
    op.create_table(
        "notification_preferences",
        sa.Column("user_id", ID, nullable=False),
        sa.Column("email_new_message", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_new_favorite", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_listing_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_listing_rejected", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_new_review", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_verification_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_marketing", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("app_new_message", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("app_new_favorite", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("app_listing_update", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    # Seed default categories
    categories = sa.table(
        "categories",
        sa.column("id", sa.String),
        sa.column("name", sa.String),
        sa.column("slug", sa.String),
        sa.column("icon", sa.String),
        sa.column("description", sa.String),
    )
    op.bulk_insert(categories, DEFAULT_CATEGORIES)


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("notification_preferences")
    op.drop_table("reports")
    op.drop_table("admin_logs")
    op.drop_table("verification_requests")
    op.drop_table("reviews")
    op.drop_table("favorites")
    op.drop_table("messages")
    op.drop_table("listings")
    op.drop_table("categories")
    op.drop_table("seller_profiles")
    op.drop_table("users")
