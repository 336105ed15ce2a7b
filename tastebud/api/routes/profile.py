"""Profile Endpoints — the caller's foodie card data.

Invariants:
    - Caller must be authenticated; a caller without a profile gets NOT_FOUND
    - Presentation (QR payload, wallet pass) is left to the client
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.api.dependencies import get_caller_id
from tastebud.infrastructure.database import get_db
from tastebud.schemas.profile import ProfileCard
from tastebud.services.profile_card import build_profile_card

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("/card", response_model=ProfileCard)
async def generate_profile_card(
    caller_id: str = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Name, crest code, points and top flavors of the caller."""
    return ProfileCard(**await build_profile_card(db, caller_id))
