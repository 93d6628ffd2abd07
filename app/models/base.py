"""SQLAlchemy declarative Base shared by all ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the target for Alembic autogenerate."""

    pass
