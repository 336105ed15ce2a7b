"""Submission Approval — creates the approved restaurant and rewards the submitter once.

Invariants:
    - Reacts only to a non-approved -> approved status change
    - restaurant_id on the submission is the compare-and-set guard: set at most once,
      and only while the persisted status is still approved
    - Restaurant insert, guard write and +100 grant commit together or not at all
    - Newly created restaurants start with an empty taste signature

Design Decisions:
    - Submission-created events are logged only; rewards wait for admin approval
"""

import logging
from collections.abc import Mapping

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import RewardReason, SubmissionStatus
from tastebud.core.enforce_thresholds import is_newly_approved
from tastebud.core.errors import MalformedDocumentError
from tastebud.models.restaurant import Restaurant
from tastebud.models.restaurant_submission import RestaurantSubmission
from tastebud.services.reward_ledger import RewardLedger

logger = logging.getLogger(__name__)


class SubmissionHandlers:
    """Reacts to restaurant submission documents."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.ledger = RewardLedger(db)

    def on_submission_created(self, document: Mapping) -> None:
        logger.info(
            f"New restaurant suggestion received: {document.get('name')}",
            extra={"submission_id": document.get("id")},
        )

    async def on_submission_updated(
        self, before: Mapping, after: Mapping,
    ) -> str | None:
        """Handle approval. Returns the created restaurant id, or None."""
        if not is_newly_approved(before, after):
            return None

        submission_id = after.get("id")
        submitted_by = after.get("submitted_by")
        if not submission_id or not after.get("name"):
            raise MalformedDocumentError(
                "Approved submission is missing id or name.",
            )
        if not submitted_by:
            raise MalformedDocumentError(
                "Approved submission is missing 'submitted_by'.",
            )

        restaurant = Restaurant(
            name=after["name"],
            address=after.get("address"),
            location=after.get("location"),
            city=after.get("city") or "",
            state=after.get("state") or "",
            cuisine_tags=list(after.get("cuisine_tags") or []),
            taste_signature={},
            review_count=0,
            created_by=submitted_by,
        )
        self.db.add(restaurant)
        await self.db.flush()

        written = await self.db.execute(
            update(RestaurantSubmission)
            .where(RestaurantSubmission.id == submission_id)
            .where(RestaurantSubmission.status == SubmissionStatus.APPROVED.value)
            .where(RestaurantSubmission.restaurant_id.is_(None))
            .values(restaurant_id=restaurant.id)
        )
        if written.rowcount == 0:
            await self.db.rollback()
            logger.info(
                f"Submission {submission_id} already processed or not approved",
                extra={"submission_id": submission_id},
            )
            return None

        await self.ledger.grant(
            submitted_by, RewardReason.SUBMISSION_APPROVED, submission_id,
        )
        await self.db.commit()
        logger.info(
            f"Approved restaurant '{restaurant.name}'",
            extra={
                "submission_id": submission_id,
                "restaurant_id": restaurant.id,
                "user_id": submitted_by,
            },
        )
        return restaurant.id
