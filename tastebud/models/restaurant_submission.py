"""RestaurantSubmission ORM — a user-suggested restaurant awaiting admin approval.

Invariants:
    - status in {pending, approved, rejected}
    - restaurant_id is set at most once, when the approval is processed; it is the
      compare-and-set guard that keeps approval handling exactly-once
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class RestaurantSubmission(Base):
    """Suggested restaurant submitted by a user."""
    __tablename__ = "restaurant_submissions"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    cuisine_tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    restaurant_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("restaurants.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
