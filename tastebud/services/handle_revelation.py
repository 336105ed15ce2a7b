"""Revelation Controller — one-time foodie crest reveal at the review threshold.

Invariants:
    - Unrevealed -> Revealed is terminal; a revealed user is never re-classified
    - The personality code is computed from ALL of the user's own reviews
    - The write is a compare-and-set: UPDATE ... WHERE crest_revealed IS false,
      so a duplicate or concurrent invocation that lost the race writes nothing
    - +500 points granted in the same transaction as the crest flip

Design Decisions:
    - The early crest_revealed read is only a shortcut; correctness comes from the
      guarded UPDATE re-checking persisted state at write time
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import PersonalityCode, RewardReason
from tastebud.core.enforce_thresholds import should_reveal
from tastebud.core.personality import classify_personality
from tastebud.core.taste_signature import aggregate_signature, flatten_ratings
from tastebud.models.review import Review
from tastebud.models.user import User
from tastebud.services.reward_ledger import RewardLedger

logger = logging.getLogger(__name__)


class RevelationController:
    """Fires the foodie personality revelation exactly once per user."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.ledger = RewardLedger(db)

    async def check(self, user_id: str) -> PersonalityCode | None:
        """Reveal the user's crest if the threshold is met. Returns the new code."""
        result = await self.db.execute(
            select(User.crest_revealed).where(User.id == user_id),
        )
        crest_revealed = result.scalar_one_or_none()
        if crest_revealed is None:
            logger.warning(
                f"User {user_id} not found; skipping revelation check",
                extra={"user_id": user_id},
            )
            return None
        if crest_revealed:
            return None

        result = await self.db.execute(
            select(Review.taste_dial_data).where(Review.author_id == user_id),
        )
        ratings = list(result.scalars().all())
        logger.info(
            f"User {user_id} has {len(ratings)} reviews",
            extra={"user_id": user_id},
        )
        if not should_reveal(crest_revealed, len(ratings)):
            return None

        aggregate = aggregate_signature(ratings)
        code = classify_personality(
            aggregate.signature, flatten_ratings(ratings),
        )
        return await self._reveal(user_id, code)

    async def _reveal(
        self, user_id: str, code: PersonalityCode,
    ) -> PersonalityCode | None:
        written = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.crest_revealed.is_(False))
            .values(personality_code=code, crest_revealed=True)
        )
        if written.rowcount == 0:
            await self.db.rollback()
            logger.info(
                f"Crest for user {user_id} already revealed by another delivery",
                extra={"user_id": user_id},
            )
            return None

        await self.ledger.grant(user_id, RewardReason.REVELATION, user_id)
        await self.db.commit()
        logger.info(
            f"Revelation for user {user_id}! Personality: {code}",
            extra={"user_id": user_id},
        )
        return code
