"""Tests for threshold guards — revelation, tip verification, submission approval."""

from tastebud.core.domain_types import REVELATION_THRESHOLD, VERIFICATION_THRESHOLD
from tastebud.core.enforce_thresholds import (
    is_newly_approved, should_reveal, should_verify_tip,
)


def test_reveal_at_threshold():
    assert should_reveal(False, REVELATION_THRESHOLD)
    assert should_reveal(False, REVELATION_THRESHOLD + 3)


def test_no_reveal_below_threshold():
    assert not should_reveal(False, REVELATION_THRESHOLD - 1)


def test_no_reveal_once_revealed():
    assert not should_reveal(True, 100)


def test_verify_when_upvotes_reach_threshold():
    before = {"upvotes": VERIFICATION_THRESHOLD - 1, "verified": False}
    after = {"upvotes": VERIFICATION_THRESHOLD, "verified": False}
    assert should_verify_tip(before, after)


def test_no_verify_when_upvotes_unchanged():
    doc = {"upvotes": 5, "verified": False}
    assert not should_verify_tip(doc, dict(doc))


def test_no_verify_when_already_verified():
    assert not should_verify_tip(
        {"upvotes": 3, "verified": True}, {"upvotes": 4, "verified": True},
    )


def test_no_verify_below_threshold():
    assert not should_verify_tip({"upvotes": 0}, {"upvotes": 2})


def test_missing_upvotes_treated_as_zero():
    assert not should_verify_tip({}, {})
    assert should_verify_tip({}, {"upvotes": 3})


def test_newly_approved():
    assert is_newly_approved({"status": "pending"}, {"status": "approved"})
    assert is_newly_approved({}, {"status": "approved"})


def test_not_newly_approved():
    assert not is_newly_approved({"status": "approved"}, {"status": "approved"})
    assert not is_newly_approved({"status": "pending"}, {"status": "rejected"})
