"""Group Schemas — Pydantic models with field-level validation for group endpoints.

Invariants:
    - GroupCreate.name: 1-50 chars after stripping whitespace
    - AddMemberRequest.email: non-empty, stripped

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - Validation failures surface as 400 INVALID_ARGUMENT via the global handler
"""

from pydantic import BaseModel, Field, field_validator

from tastebud.core.domain_types import GROUP_NAME_MAX_LENGTH


class GroupCreate(BaseModel):
    """Group creation — validates name length and whitespace."""
    name: str = Field(min_length=1, max_length=GROUP_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class GroupCreated(BaseModel):
    group_id: str


class AddMemberRequest(BaseModel):
    """Add a member by email."""
    email: str = Field(min_length=1, max_length=320)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("email cannot be empty or whitespace")
        return v


class AddMemberResponse(BaseModel):
    ok: bool = True
    message: str = "Member added successfully."


class RecommendedRestaurant(BaseModel):
    """One ranked restaurant."""
    id: str
    name: str
    address: str | None = None
    score: float
    reason: str


class RecommendationResponse(BaseModel):
    """Restaurants ranked along the group's top flavor."""
    group_id: str
    top_dimension: str
    recommendations: list[RecommendedRestaurant]
