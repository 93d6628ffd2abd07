"""Role endpoints: create (admin only), list and lookup by value."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_role_directory, require_admin
from app.core.errors import DuplicateRoleError
from app.schemas.auth import TokenClaims
from app.schemas.roles import RoleCreate, RoleRead
from app.services.roles import RoleDirectory

router = APIRouter()


@router.post("", response_model=RoleRead, status_code=status.HTTP_201_CREATED)
def create_role(
    body: RoleCreate,
    roles: Annotated[RoleDirectory, Depends(get_role_directory)],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> RoleRead:
    try:
        role = roles.create(body.value, body.description)
    except DuplicateRoleError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return RoleRead.model_validate(role)


@router.get("", response_model=list[RoleRead])
def list_roles(
    roles: Annotated[RoleDirectory, Depends(get_role_directory)],
) -> list[RoleRead]:
    return [RoleRead.model_validate(r) for r in roles.list_roles()]


@router.get("/{value}", response_model=RoleRead)
def get_role(
    value: str,
    roles: Annotated[RoleDirectory, Depends(get_role_directory)],
) -> RoleRead:
    """Look up a role by its value (e.g. USER, ADMIN)."""
    role = roles.find_by_value(value)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found.")
    return RoleRead.model_validate(role)
