"""Threshold Guards — pure decisions for one-time threshold-crossing events.

Invariants:
    - All guards are PURE: they decide, the shell performs the compare-and-set write
    - Revelation fires once review_count >= REVELATION_THRESHOLD and never after
      crest_revealed is true
    - Tip verification requires the upvote count to have changed in this delivery,
      the tip to be unverified, and upvotes >= VERIFICATION_THRESHOLD
    - Submission approval reacts only to a non-approved -> approved transition

Design Decisions:
    - Guards read the trigger's before/after documents; the shell re-checks the same
      condition against persisted state in the UPDATE's WHERE clause, so a guard
      passing on a stale document never double-fires
"""

from collections.abc import Mapping

from tastebud.core.domain_types import (
    REVELATION_THRESHOLD, VERIFICATION_THRESHOLD, SubmissionStatus,
)


def should_reveal(crest_revealed: bool, review_count: int) -> bool:
    """Revelation gate: unrevealed user with enough authored reviews."""
    if crest_revealed:
        return False
    return review_count >= REVELATION_THRESHOLD


def should_verify_tip(before: Mapping, after: Mapping) -> bool:
    """Verification gate for a tip update (before/after document state)."""
    upvotes = after.get("upvotes") or 0
    if upvotes == (before.get("upvotes") or 0):
        return False
    if after.get("verified"):
        return False
    return upvotes >= VERIFICATION_THRESHOLD


def is_newly_approved(before: Mapping, after: Mapping) -> bool:
    """Submission moved into approved in this update."""
    approved = SubmissionStatus.APPROVED.value
    return after.get("status") == approved and before.get("status") != approved
