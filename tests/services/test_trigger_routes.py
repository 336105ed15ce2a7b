"""Trigger Endpoints — end-to-end reactions to document events over HTTP.

Invariants checked:
    - Review creation fans out: +25 author reward, restaurant refresh, revelation
      check, refresh of every group the author belongs to
    - Duplicate deliveries change nothing
    - Malformed documents are skipped with 200, not rejected
"""

import pytest

from tastebud.core.domain_types import RewardReason
from tastebud.models.restaurant import Restaurant
from tastebud.models.restaurant_submission import RestaurantSubmission
from tastebud.models.review import Review
from tastebud.models.taste_group import TasteGroup
from tastebud.models.tip import Tip
from tastebud.models.user import User

from factories import make_group, make_restaurant, make_reviews, make_user

FIFTEENTH = {"Richness": 5, "Spiciness": 1, "Sweetness": 4}
PRIOR = {"Richness": 3, "Spiciness": 3, "Sweetness": 3}


def _review_doc(review_id="rv-new", author_id="u1", restaurant_id="r1", ratings=None):
    return {"document": {
        "id": review_id, "author_id": author_id, "restaurant_id": restaurant_id,
        "taste_dial_data": FIFTEENTH if ratings is None else ratings,
    }}


@pytest.fixture
async def fifteenth_review(seed):
    """User with 14 prior reviews who has just written the 15th."""
    await seed(
        make_user("u1"), make_restaurant("r1"),
        *make_reviews("u1", "r1", [PRIOR] * 14),
        Review(id="rv-new", author_id="u1", restaurant_id="r1", taste_dial_data=FIFTEENTH),
    )


async def test_fifteenth_review_reveals_crest(client, fifteenth_review, fetch):
    res = await client.post("/api/v1/triggers/review_created", json=_review_doc())

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["awarded"] is True
    # Richness 47/15 > Spiciness 43/15; mean of means 136/45 <= 3.5;
    # Sweetness 46/15 > 3; variance of all 45 ratings < 2
    assert body["personality_code"] == "RMSN"

    user = await fetch(User, "u1")
    assert user.crest_revealed
    assert user.personality_code == "RMSN"
    assert user.points == 525

    restaurant = await fetch(Restaurant, "r1")
    assert restaurant.review_count == 15
    assert restaurant.taste_signature["Richness"] == pytest.approx(47 / 15)
    assert restaurant.taste_signature["Spiciness"] == pytest.approx(43 / 15)
    assert restaurant.taste_signature["Sweetness"] == pytest.approx(46 / 15)


async def test_redelivered_review_changes_nothing(client, fifteenth_review, fetch, count_grants):
    await client.post("/api/v1/triggers/review_created", json=_review_doc())
    res = await client.post("/api/v1/triggers/review_created", json=_review_doc())

    assert res.status_code == 200
    assert res.json()["awarded"] is False
    assert res.json()["personality_code"] is None
    user = await fetch(User, "u1")
    assert user.points == 525
    assert await count_grants("u1", RewardReason.REVELATION) == 1
    assert await count_grants("u1", RewardReason.REVIEW_AUTHORED) == 1


async def test_review_refreshes_author_groups(client, seed, fetch):
    await seed(
        make_user("u1"), make_user("u2"), make_restaurant("r1"),
        *make_group("g1", ["u1", "u2"]),
        *make_group("g2", ["u2"]),
        *make_reviews("u2", "r1", [{"Umami": 2}]),
        Review(id="rv-new", author_id="u1", restaurant_id="r1", taste_dial_data={"Umami": 4}),
    )

    res = await client.post(
        "/api/v1/triggers/review_created", json=_review_doc(ratings={"Umami": 4}),
    )

    assert res.json()["groups_refreshed"] == 1
    g1 = await fetch(TasteGroup, "g1")
    assert g1.taste_signature == pytest.approx({"Umami": 3.0})
    assert g1.review_count == 2
    g2 = await fetch(TasteGroup, "g2")
    assert g2.taste_signature == {}
    assert (await fetch(User, "u1")).points == 25


@pytest.mark.parametrize("document", [
    {"id": "rv-x", "restaurant_id": "r1", "taste_dial_data": {}},
    {"id": "rv-x", "author_id": "u1", "taste_dial_data": {}},
    {"id": "rv-x", "author_id": "u1", "restaurant_id": "r1",
     "taste_dial_data": {"Richness": "loads"}},
])
async def test_malformed_review_is_skipped(client, seed, fetch, document):
    await seed(make_user("u1"), make_restaurant("r1"))

    res = await client.post("/api/v1/triggers/review_created", json={"document": document})

    assert res.status_code == 200
    assert res.json()["status"] == "skipped"
    assert (await fetch(User, "u1")).points == 0


async def test_missing_document_is_skipped(client):
    res = await client.post("/api/v1/triggers/review_created", json={})
    assert res.status_code == 200
    assert res.json()["status"] == "skipped"


async def test_unknown_trigger_kind_rejected(client):
    res = await client.post("/api/v1/triggers/photo_uploaded", json={})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ARGUMENT"


async def test_tip_update_verifies_once(client, seed, fetch):
    await seed(make_user("u1"), Tip(id="t1", author_id="u1", upvotes=3))
    payload = {
        "before": {"id": "t1", "author_id": "u1", "upvotes": 2, "verified": False},
        "after": {"id": "t1", "author_id": "u1", "upvotes": 3, "verified": False},
    }

    first = await client.post("/api/v1/triggers/tip_updated", json=payload)
    second = await client.post("/api/v1/triggers/tip_updated", json=payload)

    assert first.json() == {"status": "ok", "verified": True}
    assert second.json() == {"status": "ok", "verified": False}
    assert (await fetch(User, "u1")).points == 15


async def test_membership_change_refreshes_group(client, seed, fetch):
    await seed(
        make_user("u1"), make_user("u2"), make_restaurant("r1"),
        *make_group("g1", ["u1", "u2"]),
        *make_reviews("u1", "r1", [{"Sweetness": 5}]),
        *make_reviews("u2", "r1", [{"Sweetness": 1}]),
    )

    res = await client.post("/api/v1/triggers/membership_changed", json={
        "before": {"id": "g1", "members": ["u1"]},
        "after": {"id": "g1", "members": ["u1", "u2"]},
    })

    assert res.json() == {"status": "ok", "refreshed": True}
    group = await fetch(TasteGroup, "g1")
    assert group.taste_signature == pytest.approx({"Sweetness": 3.0})


async def test_membership_unchanged_is_noop(client, seed, fetch):
    await seed(make_user("u1"), *make_group("g1", ["u1"]))

    res = await client.post("/api/v1/triggers/membership_changed", json={
        "before": {"id": "g1", "members": ["u1"], "name": "old"},
        "after": {"id": "g1", "members": ["u1"], "name": "new"},
    })

    assert res.json() == {"status": "ok", "refreshed": False}


async def test_submission_approval_over_http(client, seed, fetch):
    await seed(
        make_user("u1"),
        RestaurantSubmission(id="s1", name="Pho Real", submitted_by="u1", status="approved"),
    )
    before = {"id": "s1", "name": "Pho Real", "submitted_by": "u1", "status": "pending"}
    after = {**before, "status": "approved"}

    res = await client.post(
        "/api/v1/triggers/submission_updated", json={"before": before, "after": after},
    )

    restaurant_id = res.json()["restaurant_id"]
    assert restaurant_id
    assert (await fetch(Restaurant, restaurant_id)).name == "Pho Real"
    assert (await fetch(User, "u1")).points == 100


async def test_submission_without_submitter_is_skipped(client):
    before = {"id": "s1", "name": "Pho Real", "status": "pending"}
    res = await client.post(
        "/api/v1/triggers/submission_updated",
        json={"before": before, "after": {**before, "status": "approved"}},
    )
    assert res.json()["status"] == "skipped"


async def test_submission_created_is_logged(client):
    res = await client.post(
        "/api/v1/triggers/submission_created",
        json={"document": {"id": "s9", "name": "Noodle Bar"}},
    )
    assert res.json() == {"status": "ok"}


async def test_story_created_is_logged(client):
    res = await client.post(
        "/api/v1/triggers/story_created",
        json={"document": {"id": "st1", "restaurant_id": "r1", "author_id": "u1"}},
    )
    assert res.json() == {"status": "ok"}


@pytest.mark.parametrize("before_upvotes,after_upvotes", [
    (2, "3"),
    ("2", 3),
    (2, 3.0),
    (2, True),
])
async def test_tip_with_non_integer_upvotes_is_skipped(
    client, seed, fetch, before_upvotes, after_upvotes,
):
    await seed(make_user("u1"), Tip(id="t1", author_id="u1", upvotes=3))
    base = {"id": "t1", "author_id": "u1", "verified": False}

    res = await client.post("/api/v1/triggers/tip_updated", json={
        "before": {**base, "upvotes": before_upvotes},
        "after": {**base, "upvotes": after_upvotes},
    })

    assert res.status_code == 200
    assert res.json()["status"] == "skipped"
    assert not (await fetch(Tip, "t1")).verified
    assert (await fetch(User, "u1")).points == 0


async def test_review_with_oversized_rating_is_skipped(client, seed, fetch):
    await seed(make_user("u1"), make_restaurant("r1"))

    res = await client.post(
        "/api/v1/triggers/review_created",
        json=_review_doc(review_id="rv-big", ratings={"Richness": 10 ** 400}),
    )

    assert res.status_code == 200
    assert res.json()["status"] == "skipped"
    assert (await fetch(User, "u1")).points == 0


@pytest.mark.parametrize("members", [
    [["u1"]],
    [{"id": "u1"}],
    [1, 2],
    "u1",
])
async def test_membership_with_malformed_members_is_skipped(client, seed, members):
    await seed(make_user("u1"), *make_group("g1", ["u1"]))

    res = await client.post("/api/v1/triggers/membership_changed", json={
        "before": {"id": "g1", "members": ["u1"]},
        "after": {"id": "g1", "members": members},
    })

    assert res.status_code == 200
    assert res.json()["status"] == "skipped"
