"""Profile Card — data payload behind a user's foodie card.

Invariants:
    - Read-only
    - top_dimensions: up to 3 dimensions the user rated most often
    - Unrevealed users get code "Not Revealed"; missing display name -> "N/A"
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.domain_types import PROFILE_TOP_DIMENSIONS
from tastebud.core.errors import ResourceNotFoundError
from tastebud.core.select_dimensions import rank_dimensions_by_frequency
from tastebud.models.review import Review
from tastebud.models.user import User

NOT_REVEALED = "Not Revealed"


async def build_profile_card(db: AsyncSession, user_id: str) -> dict:
    """Name, crest code, points and top flavors for user_id."""
    user = await db.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError("User", user_id)

    result = await db.execute(
        select(Review.taste_dial_data).where(Review.author_id == user_id),
    )
    top_dimensions = rank_dimensions_by_frequency(
        result.scalars().all(), PROFILE_TOP_DIMENSIONS,
    )
    return {
        "user_id": user.id,
        "name": user.display_name or "N/A",
        "code": user.personality_code or NOT_REVEALED,
        "points": user.points or 0,
        "top_dimensions": top_dimensions,
    }
