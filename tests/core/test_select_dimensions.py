"""Tests for top-dimension selection and frequency ranking."""

import pytest

from tastebud.core.errors import NoSignalError, ResourceNotFoundError
from tastebud.core.select_dimensions import (
    rank_dimensions_by_frequency, select_top_dimension,
)


def test_highest_mean_wins():
    assert select_top_dimension({"Sweetness": 2.0, "Spiciness": 4.5}) == "Spiciness"


def test_ties_break_lexicographically():
    signature = {"Umami": 4.0, "Richness": 4.0, "Sweetness": 1.0}
    assert select_top_dimension(signature) == "Richness"
    # insertion order does not matter
    reordered = {"Sweetness": 1.0, "Richness": 4.0, "Umami": 4.0}
    assert select_top_dimension(reordered) == "Richness"


def test_empty_signature_raises_no_signal():
    with pytest.raises(NoSignalError) as exc:
        select_top_dimension({}, "group-1")
    assert isinstance(exc.value, ResourceNotFoundError)
    assert exc.value.code == "NOT_FOUND"


def test_negative_means_still_select():
    assert select_top_dimension({"a": -2.0, "b": -1.0}) == "b"


def test_rank_by_frequency():
    records = [
        {"Richness": 1, "Sweetness": 2},
        {"Richness": 5},
        {"Richness": 3, "Spiciness": 4, "Sweetness": 1},
        {"Umami": 2},
    ]
    assert rank_dimensions_by_frequency(records, 3) == [
        "Richness", "Sweetness", "Spiciness",
    ]


def test_rank_by_frequency_handles_empty_records():
    assert rank_dimensions_by_frequency([], 3) == []
    assert rank_dimensions_by_frequency([None, {}], 3) == []
