"""Pydantic request/response schemas."""

from app.schemas.auth import CredentialsRequest, RoleClaim, TokenClaims, TokenResponse
from app.schemas.posts import PostRead
from app.schemas.roles import RoleCreate, RoleRead
from app.schemas.users import (
    AddRoleRequest,
    BanUserRequest,
    UnbanUserRequest,
    UserRead,
)

__all__ = [
    "AddRoleRequest",
    "BanUserRequest",
    "CredentialsRequest",
    "PostRead",
    "RoleClaim",
    "RoleCreate",
    "RoleRead",
    "TokenClaims",
    "TokenResponse",
    "UnbanUserRequest",
    "UserRead",
]
