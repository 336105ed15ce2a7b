"""Foodie Personality Classifier — 4-letter code from a taste signature.

Invariants:
    - classify_personality is PURE and total: any input yields a 4-char code
    - Missing dimensions count as 0 (the "low" branch)
    - Letter 4 uses the variance of individual ratings, not of the means
    - ({}, []) -> "SMVN"

Design Decisions:
    - One helper per letter: each decision readable and testable on its own
"""

import math
from collections.abc import Mapping, Sequence

from tastebud.core.domain_types import (
    RICHNESS, SPICINESS, SWEETNESS, PersonalityCode,
)

INTENSITY_CUTOFF = 3.5
SWEETNESS_CUTOFF = 3.0
VARIANCE_CUTOFF = 2.0


def population_variance(values: Sequence[float]) -> float:
    """Population variance; fewer than 2 values -> 0."""
    if len(values) < 2:
        return 0.0
    mean = math.fsum(values) / len(values)
    return math.fsum((v - mean) ** 2 for v in values) / len(values)


def _richness_letter(signature: Mapping[str, float]) -> str:
    richness = signature.get(RICHNESS, 0.0)
    spiciness = signature.get(SPICINESS, 0.0)
    return "R" if richness > spiciness else "S"


def _intensity_letter(signature: Mapping[str, float]) -> str:
    overall = (
        math.fsum(signature.values()) / len(signature) if signature else 0.0
    )
    return "I" if overall > INTENSITY_CUTOFF else "M"


def _sweetness_letter(signature: Mapping[str, float]) -> str:
    return "S" if signature.get(SWEETNESS, 0.0) > SWEETNESS_CUTOFF else "V"


def _breadth_letter(all_ratings: Sequence[float]) -> str:
    return "B" if population_variance(all_ratings) > VARIANCE_CUTOFF else "N"


def classify_personality(
    signature: Mapping[str, float], all_ratings: Sequence[float],
) -> PersonalityCode:
    """Derive the foodie personality code. Pure, never raises."""
    return PersonalityCode(
        _richness_letter(signature)
        + _intensity_letter(signature)
        + _sweetness_letter(signature)
        + _breadth_letter(list(all_ratings))
    )
