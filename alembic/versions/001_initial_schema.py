"""Initial schema — users, restaurants, reviews, groups, tips, submissions, reward ledger.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("email", sa.String(320), nullable=True, unique=True),
        sa.Column("display_name", sa.String(200), nullable=True),
        sa.Column("points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("personality_code", sa.String(4), nullable=True),
        sa.Column("crest_revealed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("city", sa.String(100), nullable=False, server_default=""),
        sa.Column("state", sa.String(100), nullable=False, server_default=""),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column("cuisine_tags", sa.JSON, nullable=False),
        sa.Column("taste_signature", sa.JSON, nullable=False),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("author_id", sa.String(128), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("restaurant_id", sa.String(128), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("taste_dial_data", sa.JSON, nullable=False),
        sa.Column("text", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reviews_author_id", "reviews", ["author_id"])
    op.create_index("ix_reviews_restaurant_id", "reviews", ["restaurant_id"])

    op.create_table(
        "taste_groups",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column("taste_signature", sa.JSON, nullable=False),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("allergies", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "group_members",
        sa.Column(
            "group_id", sa.String(128),
            sa.ForeignKey("taste_groups.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("user_id", sa.String(128), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_group_members_user_id", "group_members", ["user_id"])

    op.create_table(
        "tips",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("author_id", sa.String(128), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("restaurant_id", sa.String(128), sa.ForeignKey("restaurants.id"), nullable=True),
        sa.Column("text", sa.Text, nullable=False, server_default=""),
        sa.Column("upvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tips_author_id", "tips", ["author_id"])

    op.create_table(
        "restaurant_submissions",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column("cuisine_tags", sa.JSON, nullable=True),
        sa.Column("submitted_by", sa.String(128), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("restaurant_id", sa.String(128), sa.ForeignKey("restaurants.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "reward_grants",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("user_id", sa.String(128), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("reason", sa.String(32), nullable=False),
        sa.Column("source_id", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("reason", "source_id", name="uq_reward_grants_reason_source"),
    )
    op.create_index("ix_reward_grants_user_id", "reward_grants", ["user_id"])


def downgrade() -> None:
    op.drop_table("reward_grants")
    op.drop_table("restaurant_submissions")
    op.drop_table("tips")
    op.drop_table("group_members")
    op.drop_table("taste_groups")
    op.drop_table("reviews")
    op.drop_table("restaurants")
    op.drop_table("users")
