"""Signature Refresh — full recompute of restaurant and group taste signatures.

Invariants:
    - Full read-then-overwrite: read all current evidence, aggregate, write the whole
      signature and review_count in one UPDATE (never partially updated)
    - Restaurant evidence = reviews of the restaurant; group evidence = reviews
      authored by current members
    - No reviews -> signature reset to {} with review_count 0
    - Each refresh commits on its own; concurrent refreshes are last-writer-wins

Design Decisions:
    - Full recompute over incremental sum/count pairs: output always equals the mean
      of persisted evidence, at the cost of a window where a concurrent review is
      missing until its own trigger's refresh lands
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.taste_signature import SignatureAggregate, aggregate_signature
from tastebud.models.restaurant import Restaurant
from tastebud.models.review import Review
from tastebud.models.taste_group import GroupMember, TasteGroup

logger = logging.getLogger(__name__)


class SignatureRefresher:
    """Recomputes denormalized signatures from persisted reviews."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def refresh_restaurant(
        self, restaurant_id: str,
    ) -> SignatureAggregate | None:
        """Recompute a restaurant's signature. None if the restaurant is missing."""
        result = await self.db.execute(
            select(Review.taste_dial_data)
            .where(Review.restaurant_id == restaurant_id)
        )
        aggregate = aggregate_signature(result.scalars().all())

        written = await self.db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant_id)
            .values(
                taste_signature=aggregate.signature,
                review_count=aggregate.evidence_count,
            )
        )
        if written.rowcount == 0:
            await self.db.rollback()
            logger.warning(
                f"Restaurant {restaurant_id} not found; signature not stored",
                extra={"restaurant_id": restaurant_id},
            )
            return None
        await self.db.commit()
        logger.info(
            f"Updated taste signature for restaurant {restaurant_id} "
            f"({aggregate.evidence_count} reviews)",
            extra={"restaurant_id": restaurant_id},
        )
        return aggregate

    async def refresh_group(self, group_id: str) -> SignatureAggregate | None:
        """Recompute a group's signature from its members' reviews."""
        members = select(GroupMember.user_id).where(
            GroupMember.group_id == group_id,
        )
        result = await self.db.execute(
            select(Review.taste_dial_data)
            .where(Review.author_id.in_(members))
        )
        aggregate = aggregate_signature(result.scalars().all())

        written = await self.db.execute(
            update(TasteGroup)
            .where(TasteGroup.id == group_id)
            .values(
                taste_signature=aggregate.signature,
                review_count=aggregate.evidence_count,
            )
        )
        if written.rowcount == 0:
            await self.db.rollback()
            logger.warning(
                f"Group {group_id} not found; signature not stored",
                extra={"group_id": group_id},
            )
            return None
        await self.db.commit()
        logger.info(
            f"Updated taste signature for group {group_id} "
            f"({aggregate.evidence_count} reviews)",
            extra={"group_id": group_id},
        )
        return aggregate

    async def groups_of_member(self, user_id: str) -> list[str]:
        """Ids of every group the user belongs to."""
        result = await self.db.execute(
            select(GroupMember.group_id)
            .where(GroupMember.user_id == user_id)
            .order_by(GroupMember.group_id)
        )
        return list(result.scalars().all())
