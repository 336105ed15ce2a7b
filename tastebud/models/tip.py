"""Tip ORM — a verifiable pathfinder tip that earns its author points once verified.

Invariants:
    - upvotes is non-negative
    - verified flips false -> true exactly once and never reverts
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class Tip(Base):
    """Pathfinder tip about a restaurant."""
    __tablename__ = "tips"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    author_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=False, index=True,
    )
    restaurant_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("restaurants.id"), nullable=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
