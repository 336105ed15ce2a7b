"""Trigger Endpoints — entry point for the document-event substrate.

Invariants:
    - One POST per delivery, carrying full before/after document state
    - Delivery is at-least-once: every reaction behind these routes is idempotent
    - Malformed documents answer 200 {"status": "skipped"} (no redelivery)
    - Store failures answer 503 so the substrate redelivers

Design Decisions:
    - Not caller-authenticated: the substrate reaches this router over the
      internal network only
    - Path carries the TriggerKind; unknown kinds are rejected by FastAPI (400)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import TriggerKind
from tastebud.infrastructure.database import get_db
from tastebud.schemas.trigger import TriggerEnvelope
from tastebud.services.trigger_dispatch import TriggerDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/triggers", tags=["triggers"])


@router.post("/{trigger}")
async def deliver_trigger(
    trigger: TriggerKind,
    body: TriggerEnvelope,
    db: AsyncSession = Depends(get_db),
):
    """Run the engine's reaction to one document event."""
    logger.info(
        f"Trigger {trigger.value} received",
        extra={"trigger": trigger.value},
    )
    return await TriggerDispatch(db).execute(trigger, body.payload())
