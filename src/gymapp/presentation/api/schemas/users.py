"""User profile schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UpdateProfileRequest(BaseModel):
    """Request schema for updating the current user's profile.

    Omitted fields keep their current value.
    """

    height: int | None = Field(default=None, ge=0, description="Height in cm")
    weight: int | None = Field(default=None, ge=0, description="Weight in kg")
    goal: str | None = Field(default=None, max_length=255)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "height": 180,
                "weight": 75,
                "goal": "Run a marathon",
            },
        },
    )
