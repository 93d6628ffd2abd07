"""ORM models for roles and the user-role association."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from app.models.base import Base

# One row per (user, role) pair; the composite key keeps pairs unique.
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Named role checked by access guards.

    value: symbolic name such as 'USER' or 'ADMIN' (unique).
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(String(64), nullable=False, unique=True, index=True)
    description = Column(String(255), nullable=False)

    users = relationship("User", secondary=user_roles, back_populates="roles")

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, value='{self.value}')>"
