"""Role directory: lookup and creation of roles, plus seed-role bootstrap."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateRoleError
from app.models import Role

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class RoleDirectory:
    """Roles backed by the `roles` table. Roles are referenced by users, never mutated here."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_value(self, value: str) -> Role | None:
        return self.session.query(Role).filter(Role.value == value).first()

    def list_roles(self) -> list[Role]:
        return self.session.query(Role).order_by(Role.id).all()

    def create(self, value: str, description: str) -> Role:
        """Create a role. Raises DuplicateRoleError if the value is taken."""
        if self.find_by_value(value) is not None:
            raise DuplicateRoleError(f"Role '{value}' already exists.")
        role = Role(value=value, description=description)
        self.session.add(role)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRoleError(f"Role '{value}' already exists.") from e
        self.session.refresh(role)
        logger.info("Role created", extra={"role_id": role.id, "role_value": role.value})
        return role

    def ensure_seed_roles(self, settings: "Settings") -> list[Role]:
        """
        Create the default and admin roles when missing. Idempotent: safe to run repeatedly.

        Returns the roles that were created.
        """
        created: list[Role] = []
        seeds = (
            (settings.DEFAULT_ROLE_VALUE, settings.DEFAULT_ROLE_DESCRIPTION),
            (settings.ADMIN_ROLE_VALUE, settings.ADMIN_ROLE_DESCRIPTION),
        )
        for value, description in seeds:
            if self.find_by_value(value) is None:
                created.append(self.create(value, description))
        return created
