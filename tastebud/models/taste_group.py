"""TasteGroup ORM — a group subject with explicit membership.

Invariants:
    - taste_signature is the per-dimension mean over reviews authored by members
    - review_count is the number of reviews the signature was computed from
    - Membership is a set: (group_id, user_id) is the primary key of group_members

Design Decisions:
    - Association table over a JSON member list: "groups of user X" is an indexed
      equality query, and set-union append is an insert-if-absent
    - cascade delete for memberships
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tastebud.db.base import Base


class TasteGroup(Base):
    """Group of users sharing a combined taste signature."""
    __tablename__ = "taste_groups"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    taste_signature: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    review_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    allergies: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    memberships: Mapped[list["GroupMember"]] = relationship(
        "GroupMember", back_populates="group",
        cascade="all, delete-orphan", lazy="selectin",
    )


class GroupMember(Base):
    """Membership row — one user in one group."""
    __tablename__ = "group_members"

    group_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("taste_groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), primary_key=True, index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    group: Mapped["TasteGroup"] = relationship(
        "TasteGroup", back_populates="memberships",
    )
