"""Domain Types — rich types and fixed constants shared across the codebase.

Invariants:
    - UserId, RestaurantId, GroupId, TipId, SubmissionId wrap document ids (str)
    - Signature maps dimension name -> mean rating; only the three named
      dimensions below are ever inspected by name
    - Thresholds and reward amounts are fixed constants (not configuration)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - RewardReason carries its own amount: one place to read the point table
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
RestaurantId = NewType("RestaurantId", str)
GroupId = NewType("GroupId", str)
TipId = NewType("TipId", str)
SubmissionId = NewType("SubmissionId", str)
ReviewId = NewType("ReviewId", str)


# ─── Value Types ─────────────────────────────────────────────────

Signature = dict[str, float]        # dimension -> mean rating
PersonalityCode = NewType("PersonalityCode", str)  # exactly 4 chars


# ─── Named Dimensions ────────────────────────────────────────────

RICHNESS = "Richness"
SPICINESS = "Spiciness"
SWEETNESS = "Sweetness"


# ─── Thresholds ──────────────────────────────────────────────────

REVELATION_THRESHOLD = 15       # authored reviews before the crest is revealed
VERIFICATION_THRESHOLD = 3      # upvotes before a tip is verified

SINGLE_MATCH_LIMIT = 1
RANKED_MATCH_LIMIT = 5
PROFILE_TOP_DIMENSIONS = 3

GROUP_NAME_MAX_LENGTH = 50


# ─── Enums ───────────────────────────────────────────────────────

class RewardReason(str, Enum):
    """Qualifying actions that earn influence points."""
    REVIEW_AUTHORED = "review_authored"
    TIP_VERIFIED = "tip_verified"
    SUBMISSION_APPROVED = "submission_approved"
    REVELATION = "revelation"

    @property
    def amount(self) -> int:
        return REWARD_AMOUNTS[self]


REWARD_AMOUNTS: dict[RewardReason, int] = {
    RewardReason.REVIEW_AUTHORED: 25,
    RewardReason.TIP_VERIFIED: 15,
    RewardReason.SUBMISSION_APPROVED: 100,
    RewardReason.REVELATION: 500,
}


class SubmissionStatus(str, Enum):
    """Restaurant submission lifecycle — approval is an external admin action."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TriggerKind(str, Enum):
    """Document events delivered by the event substrate."""
    REVIEW_CREATED = "review_created"
    TIP_UPDATED = "tip_updated"
    MEMBERSHIP_CHANGED = "membership_changed"
    SUBMISSION_CREATED = "submission_created"
    SUBMISSION_UPDATED = "submission_updated"
    STORY_CREATED = "story_created"
