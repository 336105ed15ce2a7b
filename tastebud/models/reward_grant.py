"""RewardGrant ORM — append-only ledger of influence points paid out.

Invariants:
    - (reason, source_id) is unique: one payout per logical event
    - amount is positive
    - Never updated or deleted by the engine

Design Decisions:
    - Ledger row and points increment written in the same transaction; a
      concurrent duplicate loses on the unique constraint and rolls back
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tastebud.db.base import Base


class RewardGrant(Base):
    """One influence-point payout."""
    __tablename__ = "reward_grants"
    __table_args__ = (
        UniqueConstraint("reason", "source_id", name="uq_reward_grants_reason_source"),
    )

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    source_id: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
