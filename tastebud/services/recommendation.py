"""Recommendation Selector — best restaurants along a signature's top flavor.

Invariants:
    - Read-only: never mutates state
    - Top dimension from core.select_dimensions (ties -> lexicographic order)
    - Empty signature -> NoSignalError; no restaurant with that dimension -> NoMatchError
      (both NOT_FOUND to callers, never an empty list)
    - Ranking: restaurant's own mean at the dimension, descending; equal scores
      ordered by restaurant id so results are stable

Design Decisions:
    - JSON path + as_float() in ORDER BY: one portable query on PostgreSQL and SQLite
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tastebud.core.errors import NoMatchError
from tastebud.core.select_dimensions import select_top_dimension
from tastebud.models.restaurant import Restaurant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """Top flavor and the restaurants ranked along it."""
    top_dimension: str
    restaurants: list[Restaurant]

    def reason(self, audience: str = "group") -> str:
        return f"Highly rated for the {audience}'s favorite flavor: {self.top_dimension}"


class RestaurantRecommender:
    """Answers best-match queries over restaurant signatures."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def recommend(
        self, signature: Mapping[str, float], limit: int, subject_id: str = "",
    ) -> Recommendation:
        """Up to `limit` restaurants ranked by the signature's top flavor."""
        dimension = select_top_dimension(signature, subject_id)
        score = Restaurant.taste_signature[dimension].as_float()
        result = await self.db.execute(
            select(Restaurant)
            .where(score.is_not(None))
            .order_by(score.desc(), Restaurant.id)
            .limit(limit)
        )
        restaurants = list(result.scalars().all())
        if not restaurants:
            raise NoMatchError(dimension)
        logger.info(
            f"Recommended {len(restaurants)} restaurant(s) for top flavor {dimension}",
        )
        return Recommendation(top_dimension=dimension, restaurants=restaurants)
