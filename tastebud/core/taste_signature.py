"""Taste Signature Aggregation — per-dimension means over a set of reviews.

Invariants:
    - aggregate_signature is PURE: no IO, same input always yields the same output
    - signature[d] is the mean over the records that contain d (partial coverage allowed)
    - evidence_count is the number of input records, not a per-dimension count
    - Empty input -> ({}, 0): a valid state, not an error
    - Ratings must be finite numbers; validate_taste_data rejects anything else

Design Decisions:
    - math.fsum for totals: sum is order-independent to within float tolerance
    - Records are plain mappings (taste_dial_data dicts), not ORM rows, so the
      same function serves restaurants, groups and users
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from tastebud.core.domain_types import Signature


@dataclass(frozen=True)
class SignatureAggregate:
    """Result of aggregating evidence for one subject."""
    signature: Signature = field(default_factory=dict)
    evidence_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.signature


def aggregate_signature(
    records: Iterable[Mapping[str, float] | None],
) -> SignatureAggregate:
    """Mean rating per dimension across records. Pure.

    Each record is one review's taste_dial_data. A record without ratings
    (None or {}) still counts as evidence.
    """
    values: dict[str, list[float]] = {}
    count = 0
    for ratings in records:
        count += 1
        for dimension, rating in (ratings or {}).items():
            values.setdefault(dimension, []).append(float(rating))

    signature = {
        dimension: math.fsum(ratings) / len(ratings)
        for dimension, ratings in values.items()
    }
    return SignatureAggregate(signature=signature, evidence_count=count)


def flatten_ratings(
    records: Iterable[Mapping[str, float] | None],
) -> list[float]:
    """All individual ratings across records (not per-dimension means)."""
    return [
        float(rating)
        for ratings in records
        for rating in (ratings or {}).values()
    ]


def validate_taste_data(ratings: object) -> str | None:
    """Check a review's taste_dial_data. Returns an error message or None."""
    if ratings is None:
        return None
    if not isinstance(ratings, Mapping):
        return "taste_dial_data must be a mapping of dimension to rating"
    for dimension, rating in ratings.items():
        if not isinstance(dimension, str) or not dimension:
            return "taste dimension names must be non-empty strings"
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            return f"rating for '{dimension}' is not a number"
        try:
            finite = math.isfinite(rating)
        except OverflowError:
            finite = False
        if not finite:
            return f"rating for '{dimension}' is not finite"
    return None
