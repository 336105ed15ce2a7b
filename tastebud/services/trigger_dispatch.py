"""Trigger Dispatch — explicit routing from document event to engine reactions.

Invariants:
    - Every trigger->handler mapping is visible — no getattr magic, no auto-discovery
    - Malformed documents are logged and skipped ("skipped" result, never raised):
      redelivering the same document will not fix it
    - Store failures propagate (DatabaseError -> 503) so the substrate redelivers
    - Review creation fans out into four independent effects, each committed on
      its own: author reward, restaurant refresh, revelation check, group refreshes
    - Every effect is idempotent; a redelivery redoes only what is still missing

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Fan-out runs sequentially on one session: AsyncSession is not safe for
      concurrent use, and the effects have no ordering dependency
"""

import logging
from collections.abc import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import RewardReason, TriggerKind
from tastebud.core.errors import MalformedDocumentError
from tastebud.core.taste_signature import validate_taste_data
from tastebud.services.handle_revelation import RevelationController
from tastebud.services.handle_submission import SubmissionHandlers
from tastebud.services.handle_tip_verification import TipVerifier
from tastebud.services.reward_ledger import RewardLedger
from tastebud.services.signature_refresh import SignatureRefresher

logger = logging.getLogger(__name__)


def _require_document(payload: Mapping, key: str) -> Mapping:
    document = payload.get(key)
    if not isinstance(document, Mapping):
        raise MalformedDocumentError(f"Trigger payload is missing '{key}'.")
    return document


def _member_set(document: Mapping) -> set[str]:
    members = document.get("members") or []
    if not isinstance(members, list) or not all(
        isinstance(m, str) for m in members
    ):
        raise MalformedDocumentError("Group members must be a list of user ids.")
    return set(members)


class TriggerDispatch:
    """Routes TriggerKind -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._ledger = RewardLedger(db)
        self._refresher = SignatureRefresher(db)
        self._revelation = RevelationController(db)
        self._tips = TipVerifier(db)
        self._submissions = SubmissionHandlers(db)

        self._handlers = {
            TriggerKind.REVIEW_CREATED: self.on_review_created,
            TriggerKind.TIP_UPDATED: self.on_tip_updated,
            TriggerKind.MEMBERSHIP_CHANGED: self.on_membership_changed,
            TriggerKind.SUBMISSION_CREATED: self.on_submission_created,
            TriggerKind.SUBMISSION_UPDATED: self.on_submission_updated,
            TriggerKind.STORY_CREATED: self.on_story_created,
        }

    async def execute(self, trigger: TriggerKind, payload: Mapping) -> dict:
        """Route trigger to handler. Returns a result dict."""
        handler = self._handlers.get(trigger)
        if not handler:
            return {
                "status": "error",
                "error_code": "UNKNOWN_TRIGGER",
                "message": f"Trigger '{trigger}' does not exist.",
            }
        try:
            return await handler(payload)
        except MalformedDocumentError as e:
            logger.error(
                f"Skipping malformed {trigger.value} document: {e.message}",
                extra={"trigger": trigger.value, "error_code": e.code},
            )
            return {"status": "skipped", "reason": e.message}

    async def on_review_created(self, payload: Mapping) -> dict:
        review = _require_document(payload, "document")
        review_id = review.get("id")
        author_id = review.get("author_id")
        restaurant_id = review.get("restaurant_id")
        if not review_id or not author_id or not restaurant_id:
            raise MalformedDocumentError(
                "Review is missing id, author_id or restaurant_id.",
            )
        problem = validate_taste_data(review.get("taste_dial_data"))
        if problem:
            raise MalformedDocumentError(f"Review {review_id}: {problem}")

        awarded = await self._ledger.grant(
            author_id, RewardReason.REVIEW_AUTHORED, review_id,
        )
        await self._db.commit()

        await self._refresher.refresh_restaurant(restaurant_id)
        code = await self._revelation.check(author_id)

        group_ids = await self._refresher.groups_of_member(author_id)
        for group_id in group_ids:
            await self._refresher.refresh_group(group_id)

        return {
            "status": "ok",
            "awarded": awarded,
            "personality_code": code,
            "groups_refreshed": len(group_ids),
        }

    async def on_tip_updated(self, payload: Mapping) -> dict:
        before = _require_document(payload, "before")
        after = _require_document(payload, "after")
        verified = await self._tips.on_tip_updated(before, after)
        return {"status": "ok", "verified": verified}

    async def on_membership_changed(self, payload: Mapping) -> dict:
        before = _require_document(payload, "before")
        after = _require_document(payload, "after")
        group_id = after.get("id")
        if not group_id:
            raise MalformedDocumentError("Group update is missing id.")
        if _member_set(before) == _member_set(after):
            return {"status": "ok", "refreshed": False}
        aggregate = await self._refresher.refresh_group(group_id)
        return {"status": "ok", "refreshed": aggregate is not None}

    async def on_story_created(self, payload: Mapping) -> dict:
        story = _require_document(payload, "document")
        logger.info(
            f"New story submitted for restaurant {story.get('restaurant_id')} "
            f"by user {story.get('author_id')}",
            extra={
                "restaurant_id": story.get("restaurant_id"),
                "user_id": story.get("author_id"),
            },
        )
        return {"status": "ok"}

    async def on_submission_created(self, payload: Mapping) -> dict:
        self._submissions.on_submission_created(
            _require_document(payload, "document"),
        )
        return {"status": "ok"}

    async def on_submission_updated(self, payload: Mapping) -> dict:
        before = _require_document(payload, "before")
        after = _require_document(payload, "after")
        restaurant_id = await self._submissions.on_submission_updated(
            before, after,
        )
        return {"status": "ok", "restaurant_id": restaurant_id}
