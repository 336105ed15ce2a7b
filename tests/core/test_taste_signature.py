"""Tests for aggregate_signature / flatten_ratings / validate_taste_data — pure, no IO."""

import math

import pytest

from tastebud.core.taste_signature import (
    aggregate_signature, flatten_ratings, validate_taste_data,
)


def test_empty_input_is_valid_empty_state():
    aggregate = aggregate_signature([])
    assert aggregate.signature == {}
    assert aggregate.evidence_count == 0
    assert aggregate.is_empty


def test_mean_per_dimension():
    aggregate = aggregate_signature([
        {"Richness": 4, "Spiciness": 2},
        {"Richness": 2, "Spiciness": 5},
    ])
    assert aggregate.signature["Richness"] == pytest.approx(3.0)
    assert aggregate.signature["Spiciness"] == pytest.approx(3.5)
    assert aggregate.evidence_count == 2


def test_partial_coverage_uses_contributor_subset():
    aggregate = aggregate_signature([
        {"Richness": 4},
        {"Richness": 2, "Sweetness": 5},
        {"Umami": 1},
    ])
    assert aggregate.signature == pytest.approx(
        {"Richness": 3.0, "Sweetness": 5.0, "Umami": 1.0},
    )
    assert aggregate.evidence_count == 3


def test_dimension_absent_from_all_records_is_absent():
    aggregate = aggregate_signature([{"Richness": 4}])
    assert "Spiciness" not in aggregate.signature


def test_records_without_ratings_still_count_as_evidence():
    aggregate = aggregate_signature([None, {}, {"Sweetness": 3}])
    assert aggregate.signature == {"Sweetness": 3.0}
    assert aggregate.evidence_count == 3


def test_order_independent():
    records = [
        {"Richness": 0.1, "Spiciness": 4.7},
        {"Richness": 0.2},
        {"Richness": 0.3, "Spiciness": 1.9},
        {"Spiciness": 3.3},
    ]
    forward = aggregate_signature(records).signature
    backward = aggregate_signature(list(reversed(records))).signature
    for dimension in forward:
        assert math.isclose(forward[dimension], backward[dimension], abs_tol=1e-9)


def test_accepts_generator_input():
    aggregate = aggregate_signature(r for r in [{"Richness": 1}, {"Richness": 3}])
    assert aggregate.signature["Richness"] == pytest.approx(2.0)
    assert aggregate.evidence_count == 2


def test_flatten_ratings_keeps_individual_values():
    assert sorted(flatten_ratings([{"a": 1, "b": 2}, None, {"a": 3}])) == [1.0, 2.0, 3.0]


def test_validate_accepts_numbers_and_none():
    assert validate_taste_data({"Richness": 4, "Spiciness": 2.5}) is None
    assert validate_taste_data(None) is None
    assert validate_taste_data({}) is None


@pytest.mark.parametrize("ratings", [
    {"Richness": "high"},
    {"Richness": float("nan")},
    {"Richness": float("inf")},
    {"Richness": True},
    {"Richness": 10 ** 400},
    {"": 3},
    [1, 2, 3],
])
def test_validate_rejects_malformed_ratings(ratings):
    assert validate_taste_data(ratings) is not None
