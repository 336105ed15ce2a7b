"""Recommendation Selector — top flavor ranking with stable tie-breaks."""

import pytest

from tastebud.core.errors import NoMatchError, NoSignalError, ResourceNotFoundError
from tastebud.services.recommendation import RestaurantRecommender

from factories import make_restaurant


@pytest.fixture
async def restaurants(seed):
    await seed(
        make_restaurant("r-a", {"Spiciness": 4.0}),
        make_restaurant("r-b", {"Spiciness": 4.8, "Sweetness": 1.0}),
        make_restaurant("r-c", {"Sweetness": 5.0}),
        make_restaurant("r-d", {"Spiciness": 4.0}),
        make_restaurant("r-e", {}),
    )


async def test_ranks_by_top_dimension(restaurants, test_db):
    result = await RestaurantRecommender(test_db).recommend(
        {"Spiciness": 4.5, "Sweetness": 2.0}, limit=5,
    )
    assert result.top_dimension == "Spiciness"
    assert [r.id for r in result.restaurants] == ["r-b", "r-a", "r-d"]


async def test_single_best_match(restaurants, test_db):
    result = await RestaurantRecommender(test_db).recommend(
        {"Sweetness": 3.0}, limit=1,
    )
    assert [r.id for r in result.restaurants] == ["r-c"]
    assert result.reason() == "Highly rated for the group's favorite flavor: Sweetness"


async def test_empty_signature_is_not_found(restaurants, test_db):
    with pytest.raises(NoSignalError) as exc:
        await RestaurantRecommender(test_db).recommend({}, limit=5)
    assert isinstance(exc.value, ResourceNotFoundError)


async def test_no_candidate_with_dimension(restaurants, test_db):
    with pytest.raises(NoMatchError) as exc:
        await RestaurantRecommender(test_db).recommend({"Umami": 4.0}, limit=5)
    assert exc.value.dimension == "Umami"


async def test_top_dimension_tie_breaks_by_name(restaurants, test_db):
    result = await RestaurantRecommender(test_db).recommend(
        {"Sweetness": 4.0, "Spiciness": 4.0}, limit=1,
    )
    assert result.top_dimension == "Spiciness"
    assert result.restaurants[0].id == "r-b"
