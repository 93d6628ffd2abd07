"""Shared dependencies: access guards and service wiring."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import InvalidTokenError
from app.core.security import decode_access_token
from app.schemas.auth import TokenClaims
from app.services.auth import AuthService
from app.services.roles import RoleDirectory
from app.services.users import UserDirectory

logger = logging.getLogger(__name__)

# auto_error=False: a missing header or a non-Bearer scheme yields None instead of a 403.
security = HTTPBearer(auto_error=False)


def _not_authenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Forbidden",
    )


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """
    Dependency: require a valid Bearer JWT and return its claims.

    The claims are also stored on request.state.identity. Every failure (missing header,
    wrong scheme, bad signature, expired, malformed) gives the same 401.
    """
    if credentials is None or not credentials.credentials:
        raise _not_authenticated()
    try:
        claims = decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise _not_authenticated()
    except Exception:
        logger.warning("Unexpected error while verifying token", exc_info=True)
        raise _not_authenticated()
    request.state.identity = claims
    return claims


def require_roles(*required: str) -> Callable[[TokenClaims], TokenClaims]:
    """
    Build a dependency that allows the request if the caller holds any of the required roles.

    An empty role set allows every authenticated caller. The token is verified once, by
    get_current_identity; this check only inspects the claims it produced.
    """
    required_values = frozenset(required)

    def check_roles(
        identity: Annotated[TokenClaims, Depends(get_current_identity)],
    ) -> TokenClaims:
        if not required_values:
            return identity
        try:
            granted = identity.role_values()
        except Exception:
            logger.warning("Could not read role claims", exc_info=True)
            raise _forbidden()
        if granted.isdisjoint(required_values):
            raise _forbidden()
        return identity

    return check_roles


require_admin = require_roles(settings.ADMIN_ROLE_VALUE)


def get_role_directory(db: Annotated[Session, Depends(get_db)]) -> RoleDirectory:
    return RoleDirectory(db)


def get_user_directory(
    db: Annotated[Session, Depends(get_db)],
    roles: Annotated[RoleDirectory, Depends(get_role_directory)],
) -> UserDirectory:
    return UserDirectory(db, roles, default_role_value=settings.DEFAULT_ROLE_VALUE)


def get_auth_service(
    users: Annotated[UserDirectory, Depends(get_user_directory)],
) -> AuthService:
    return AuthService(users)
