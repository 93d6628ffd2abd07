"""Password hashing and JWT creation/verification for authentication."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import InvalidTokenError
from app.schemas.auth import RoleClaim, TokenClaims

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 5

# Tokens are stateless and cannot be refreshed; they simply expire.
TOKEN_EXPIRE_HOURS = 24

PASSWORD_MIN_LEN = 4
PASSWORD_MAX_LEN = 16


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    email: str,
    roles: Iterable[Any],
    issued_at: datetime | None = None,
) -> str:
    """
    Create a JWT carrying {email, id, roles, iat, exp}.

    roles may be ORM Role rows, RoleClaim models or plain dicts with id/value/description.
    """
    now = issued_at or datetime.now(UTC)
    expire = now + timedelta(hours=TOKEN_EXPIRE_HOURS)
    payload: dict[str, Any] = {
        "email": email,
        "id": user_id,
        "roles": [RoleClaim.model_validate(role).model_dump() for role in roles],
        "iat": now,
        "exp": expire,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT; return its claims.
    Raises InvalidTokenError on a bad signature, malformed or expired token, or unexpected payload.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
        return TokenClaims.model_validate(payload)
    except (jwt.PyJWTError, ValidationError) as e:
        raise InvalidTokenError("Invalid or expired token") from e
