"""Profile Schemas — foodie card payload."""

from pydantic import BaseModel, Field


class ProfileCard(BaseModel):
    """Data behind a user's foodie card."""
    user_id: str
    name: str
    code: str
    points: int = Field(ge=0)
    top_dimensions: list[str] = Field(max_length=3)
