"""Tip Verification — one-time verification and author reward at the upvote threshold.

Invariants:
    - Unverified -> Verified is terminal
    - upvotes must be an integer (or absent, read as 0) in both document states
    - Fires only when upvotes changed in this delivery, the tip is unverified and
      upvotes >= VERIFICATION_THRESHOLD (enforce_thresholds.should_verify_tip)
    - The write is a compare-and-set re-checked against persisted state:
      UPDATE tips SET verified = true WHERE verified IS false AND upvotes >= threshold
    - +15 points granted to the author in the same transaction
"""

import logging
from collections.abc import Mapping

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import RewardReason, VERIFICATION_THRESHOLD
from tastebud.core.enforce_thresholds import should_verify_tip
from tastebud.core.errors import ErrorContext, MalformedDocumentError
from tastebud.models.tip import Tip
from tastebud.services.reward_ledger import RewardLedger

logger = logging.getLogger(__name__)


class TipVerifier:
    """Reacts to tip updates."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.ledger = RewardLedger(db)

    async def on_tip_updated(self, before: Mapping, after: Mapping) -> bool:
        """Verify the tip if it just crossed the threshold. Returns True on transition."""
        for state in (before, after):
            upvotes = state.get("upvotes")
            if upvotes is not None and (
                isinstance(upvotes, bool) or not isinstance(upvotes, int)
            ):
                raise MalformedDocumentError(
                    f"Tip {after.get('id')} has a non-integer upvote count.",
                )
        if not should_verify_tip(before, after):
            return False

        tip_id = after.get("id")
        author_id = after.get("author_id")
        if not tip_id:
            raise MalformedDocumentError("Tip update is missing id.")
        if not author_id:
            raise MalformedDocumentError(
                f"Tip {tip_id} has no author_id.",
                ErrorContext(debug_info={"tip_id": tip_id}),
            )

        written = await self.db.execute(
            update(Tip)
            .where(Tip.id == tip_id)
            .where(Tip.verified.is_(False))
            .where(Tip.upvotes >= VERIFICATION_THRESHOLD)
            .values(verified=True)
        )
        if written.rowcount == 0:
            await self.db.rollback()
            logger.info(
                f"Tip {tip_id} already verified or below threshold in store",
                extra={"tip_id": tip_id},
            )
            return False

        await self.ledger.grant(author_id, RewardReason.TIP_VERIFIED, tip_id)
        await self.db.commit()
        logger.info(
            f"Tip {tip_id} verified",
            extra={"tip_id": tip_id, "user_id": author_id},
        )
        return True
