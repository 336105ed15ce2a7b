"""Dimension Selection — top flavor of a signature and most-rated flavors of a user.

Invariants:
    - select_top_dimension picks the strictly greatest mean; ties resolve to the
      lexicographically smallest dimension name (stable, independent of dict order)
    - Empty signature -> NoSignalError (never a silent empty answer)
    - rank_dimensions_by_frequency counts how often each dimension was rated,
      ties again broken by name

Design Decisions:
    - Explicit sort keys over max() on dict order: results must not depend on
      the order reviews were read from the store
"""

from collections import Counter
from collections.abc import Iterable, Mapping

from tastebud.core.errors import NoSignalError


def select_top_dimension(
    signature: Mapping[str, float], subject_id: str = "",
) -> str:
    """Dimension with the highest mean. Raises NoSignalError when empty."""
    if not signature:
        raise NoSignalError(subject_id)
    return min(signature.items(), key=lambda item: (-item[1], item[0]))[0]


def rank_dimensions_by_frequency(
    records: Iterable[Mapping[str, float] | None], limit: int,
) -> list[str]:
    """Dimensions rated most often across records, highest count first."""
    counts: Counter[str] = Counter()
    for ratings in records:
        counts.update((ratings or {}).keys())
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [dimension for dimension, _ in ranked[:limit]]
