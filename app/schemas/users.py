"""Request/response schemas for user administration."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.roles import RoleRead


class UserRead(BaseModel):
    """User as returned by the API (no password hash)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    email: str
    banned: bool
    ban_reason: str | None = Field(default=None, alias="banReason")
    roles: list[RoleRead] = Field(default_factory=list)


class AddRoleRequest(BaseModel):
    """Attach the role identified by its value to a user."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User id")
    value: str = Field(..., min_length=1, max_length=64, description="Role value", examples=["ADMIN"])


class BanUserRequest(BaseModel):
    """Ban a user with a free-text reason."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User id")
    ban_reason: str = Field(
        ..., alias="banReason", min_length=1, max_length=1024, description="Reason for the ban"
    )


class UnbanUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User id")
