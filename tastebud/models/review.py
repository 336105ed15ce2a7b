"""Review ORM — write-once evidence record contributing taste ratings.

Invariants:
    - author_id and restaurant_id are non-empty
    - taste_dial_data maps dimension -> finite rating
    - Never mutated by the engine (read-only evidence)

Design Decisions:
    - Indexed by author_id and restaurant_id: the two aggregation keys
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class Review(Base):
    """Review evidence — one user's ratings of one restaurant."""
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    author_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=False, index=True,
    )
    restaurant_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("restaurants.id"), nullable=False, index=True,
    )
    taste_dial_data: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
