"""ORM model for application users (auth, RBAC and bans)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.models.role import user_roles


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    ban_reason is only set while banned is True.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    banned = Column(Boolean, nullable=False, default=False, server_default=false())
    ban_reason = Column(String(1024), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    roles = relationship("Role", secondary=user_roles, back_populates="users", lazy="selectin")
    posts = relationship("Post", back_populates="author")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
