"""Registration, login and token introspection."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_auth_service, get_current_identity
from app.core.errors import (
    DuplicateUserError,
    InternalConfigurationError,
    InvalidCredentialsError,
)
from app.schemas.auth import CredentialsRequest, TokenClaims, TokenResponse
from app.services.auth import AuthService

router = APIRouter()


@router.post("/registration", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: CredentialsRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Create an account with the default role and return a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token = auth.register(body.email, body.password)
    except (DuplicateUserError, InternalConfigurationError) as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
def login(
    body: CredentialsRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Authenticate with e-mail and password; returns a JWT carrying the user's current roles."""
    try:
        token = auth.login(body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return TokenResponse(token=token)


@router.get("/me", response_model=TokenClaims)
def me(
    identity: Annotated[TokenClaims, Depends(get_current_identity)],
) -> TokenClaims:
    """Return the claims of the presented token."""
    return identity
