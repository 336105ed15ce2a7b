"""User ORM — the acting user and owner of influence points and the foodie crest.

Invariants:
    - points only increases (written exclusively through RewardLedger's atomic increment)
    - personality_code is set at most once, in the same write that flips crest_revealed
    - crest_revealed starts false and flips false -> true exactly once

Design Decisions:
    - String ids: document ids come from the external auth provider
    - email unique: AddMember resolves users by email
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class User(Base):
    """User profile with reputation and personality state."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    email: Mapped[str | None] = mapped_column(
        String(320), nullable=True, unique=True, index=True,
    )
    display_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    personality_code: Mapped[str | None] = mapped_column(
        String(4), nullable=True,
    )
    crest_revealed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
