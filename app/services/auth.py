"""Registration and login: checks credentials and issues tokens."""

import logging
from typing import Protocol

from app.core.errors import DuplicateUserError, InvalidCredentialsError
from app.core.security import create_access_token, hash_password, verify_password
from app.models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class UserAccounts(Protocol):
    """The part of the user directory the auth flow needs (implemented by UserDirectory)."""

    def find_by_email(self, email: str) -> User | None: ...

    def create_user(self, email: str, password_hash: str) -> User: ...


class AuthService:
    """Orchestrates registration and login on top of a UserAccounts store."""

    def __init__(self, accounts: UserAccounts) -> None:
        self.accounts = accounts

    def register(self, email: str, password: str) -> str:
        """
        Create a user with the default role and return a token for it.

        Raises DuplicateUserError if the e-mail is taken; InternalConfigurationError
        (from the directory) if the default role is missing.
        """
        if self.accounts.find_by_email(email) is not None:
            raise DuplicateUserError("User with this email already exists.")
        user = self.accounts.create_user(email, hash_password(password))
        logger.info("User registered", extra={"user_id": user.id})
        return self.issue_token(user)

    def login(self, email: str, password: str) -> str:
        """Return a token for valid credentials; InvalidCredentialsError otherwise."""
        user = self.accounts.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
        return self.issue_token(user)

    @staticmethod
    def issue_token(user: User) -> str:
        """Token with the user's currently assigned roles."""
        return create_access_token(user_id=user.id, email=user.email, roles=user.roles)
