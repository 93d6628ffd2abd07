"""User administration: create, list, assign roles, ban and unban (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_user_directory, require_admin
from app.core.errors import (
    DuplicateUserError,
    InternalConfigurationError,
    NotFoundError,
)
from app.core.security import hash_password
from app.schemas.auth import CredentialsRequest, TokenClaims
from app.schemas.users import AddRoleRequest, BanUserRequest, UnbanUserRequest, UserRead
from app.services.users import UserDirectory

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CredentialsRequest,
    users: Annotated[UserDirectory, Depends(get_user_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> UserRead:
    """Create a user with the default role (no token is issued)."""
    try:
        user = users.create_user(body.email, hash_password(body.password))
    except (DuplicateUserError, InternalConfigurationError) as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return UserRead.model_validate(user)


@router.get("", response_model=list[UserRead])
def list_users(
    users: Annotated[UserDirectory, Depends(get_user_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> list[UserRead]:
    """List all users with their roles."""
    return [UserRead.model_validate(u) for u in users.list_users()]


@router.post("/role", response_model=UserRead)
def add_role(
    body: AddRoleRequest,
    users: Annotated[UserDirectory, Depends(get_user_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> UserRead:
    """
    Attach a role (by value) to a user. Takes effect in tokens issued afterwards;
    tokens already held by the user keep their old role claims until they expire.
    """
    try:
        user = users.attach_role(body.user_id, body.value)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return UserRead.model_validate(user)


@router.post("/ban", response_model=UserRead)
def ban_user(
    body: BanUserRequest,
    users: Annotated[UserDirectory, Depends(get_user_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> UserRead:
    """Ban a user. Does not revoke tokens the user already holds."""
    try:
        user = users.set_ban(body.user_id, banned=True, reason=body.ban_reason)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return UserRead.model_validate(user)


@router.post("/unban", response_model=UserRead)
def unban_user(
    body: UnbanUserRequest,
    users: Annotated[UserDirectory, Depends(get_user_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> UserRead:
    """Lift a ban and clear its reason."""
    try:
        user = users.set_ban(body.user_id, banned=False)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return UserRead.model_validate(user)
