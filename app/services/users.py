"""User directory: user lookup/creation, role assignment and ban flags."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateUserError, InternalConfigurationError, NotFoundError
from app.models import User
from app.services.roles import RoleDirectory

logger = logging.getLogger(__name__)


class UserDirectory:
    """
    Users backed by the `users` and `user_roles` tables.

    E-mail uniqueness is checked before writing and enforced again by the unique index,
    so concurrent registrations with the same e-mail still yield DuplicateUserError.
    """

    def __init__(self, session: Session, roles: RoleDirectory, default_role_value: str) -> None:
        self.session = session
        self.roles = roles
        self.default_role_value = default_role_value

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def list_users(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def create_user(self, email: str, password_hash: str) -> User:
        """
        Create a user holding the default role, in a single transaction.

        Raises DuplicateUserError if the e-mail is taken and InternalConfigurationError if
        the default role has not been seeded; nothing is written in either case.
        """
        if self.find_by_email(email) is not None:
            raise DuplicateUserError("User with this email already exists.")
        default_role = self.roles.find_by_value(self.default_role_value)
        if default_role is None:
            logger.error(
                "Default role is missing; run the seed_roles script or migrations",
                extra={"role_value": self.default_role_value},
            )
            raise InternalConfigurationError("Server is not configured to register users.")

        user = User(email=email, password_hash=password_hash, banned=False)
        user.roles.append(default_role)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateUserError("User with this email already exists.") from e
        self.session.refresh(user)
        return user

    def _get_or_404(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def attach_role(self, user_id: int, role_value: str) -> User:
        """Give a user the role with this value. Attaching a role the user already has is a no-op."""
        user = self._get_or_404(user_id)
        role = self.roles.find_by_value(role_value)
        if role is None:
            raise NotFoundError("Role not found.")
        if role not in user.roles:
            user.roles.append(role)
            self.session.commit()
            self.session.refresh(user)
            logger.info("Role attached", extra={"user_id": user.id, "role_value": role.value})
        return user

    def set_ban(self, user_id: int, banned: bool, reason: str | None = None) -> User:
        """
        Set or clear the ban flag. The reason is stored only while banned.

        Already-issued tokens stay valid until they expire.
        """
        user = self._get_or_404(user_id)
        user.banned = banned
        user.ban_reason = reason if banned else None
        self.session.commit()
        self.session.refresh(user)
        logger.info("Ban status changed", extra={"user_id": user.id, "banned": banned})
        return user
