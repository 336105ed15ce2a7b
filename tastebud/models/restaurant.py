"""Restaurant ORM — a subject whose taste signature is derived from its reviews.

Invariants:
    - taste_signature is the per-dimension mean over all reviews of the restaurant
    - review_count is the number of reviews the signature was computed from
    - Both are overwritten together on every recompute (never partially updated)

Design Decisions:
    - JSON column for taste_signature: arbitrary dimension names; ranking queries use
      taste_signature[dimension].as_float(), which works on PostgreSQL and SQLite
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class Restaurant(Base):
    """Restaurant subject with denormalized taste signature."""
    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    cuisine_tags: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    taste_signature: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    review_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
