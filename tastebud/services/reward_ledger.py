"""Reward Ledger — commutative influence-point increments for qualifying actions.

Invariants:
    - Points only increase: amount must be positive
    - Increment is a single atomic UPDATE (points = points + amount), so concurrent
      awards to the same user from unrelated events never lose updates
    - One payout per (reason, source_id): a redelivered trigger finds the existing
      grant and pays nothing
    - Never commits: the caller owns the transaction, so the grant lands together
      with the transition that earned it

Design Decisions:
    - Ledger row + unique constraint over an in-process "seen" set: dedupe must
      survive restarts and multiple workers
    - Missing user logged and skipped (a missing profile will not appear on redelivery)
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import RewardReason
from tastebud.models.reward_grant import RewardGrant
from tastebud.models.user import User

logger = logging.getLogger(__name__)


class RewardLedger:
    """Applies point awards through the store's atomic increment."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def grant(
        self, user_id: str, reason: RewardReason, source_id: str,
    ) -> bool:
        """Award the fixed amount for reason. Returns True if points were applied."""
        return await self.award(user_id, reason.amount, reason, source_id)

    async def award(
        self, user_id: str, amount: int, reason: RewardReason, source_id: str,
    ) -> bool:
        """Increment user's points once per (reason, source_id)."""
        if amount <= 0:
            raise ValueError(f"Reward amount must be positive, got {amount}")

        existing = await self.db.execute(
            select(RewardGrant.id)
            .where(RewardGrant.reason == reason.value)
            .where(RewardGrant.source_id == source_id)
        )
        if existing.scalar_one_or_none() is not None:
            logger.info(
                f"Reward {reason.value} for {source_id} already granted",
                extra={"user_id": user_id, "reason": reason.value},
            )
            return False

        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(points=User.points + amount)
        )
        if result.rowcount == 0:
            logger.warning(
                f"Cannot award {amount} points: user {user_id} not found",
                extra={"user_id": user_id, "reason": reason.value},
            )
            return False

        self.db.add(RewardGrant(
            user_id=user_id, amount=amount,
            reason=reason.value, source_id=source_id,
        ))
        await self.db.flush()
        logger.info(
            f"Awarded +{amount} points to user {user_id} ({reason.value})",
            extra={"user_id": user_id, "reason": reason.value, "amount": amount},
        )
        return True
