"""Request/response schemas for auth endpoints and the token payload."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email


class CredentialsRequest(BaseModel):
    """E-mail and password for registration and login."""

    email: str = Field(..., max_length=255, description="User e-mail", examples=["user@gmail.com"])
    password: str = Field(
        ..., min_length=4, max_length=16, description="Password", examples=["12345"]
    )

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        # Validate like EmailStr but keep the address as submitted; lookups are case-sensitive.
        _, normalized = validate_email(v)
        if normalized.lower() != v.lower():
            raise ValueError("Wrong email signature")
        return v


class TokenResponse(BaseModel):
    """JWT returned after successful registration or login."""

    token: str = Field(..., description="JWT access token (send as: Authorization: Bearer <token>)")


class RoleClaim(BaseModel):
    """Role as embedded in the token payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    value: str
    description: str


class TokenClaims(BaseModel):
    """Decoded token payload; the authenticated identity attached to a request."""

    email: str
    id: int
    roles: list[RoleClaim] = Field(default_factory=list)
    iat: int
    exp: int

    def role_values(self) -> set[str]:
        return {role.value for role in self.roles}
