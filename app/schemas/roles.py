"""Request/response schemas for roles."""

from pydantic import BaseModel, ConfigDict, Field


class RoleCreate(BaseModel):
    """New role; value is the symbolic name checked by access guards."""

    value: str = Field(..., min_length=1, max_length=64, description="Role value", examples=["ADMIN"])
    description: str = Field(
        ..., min_length=1, max_length=255, description="Role description", examples=["Administrator"]
    )


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    value: str
    description: str
