"""Core configuration, database session and error types."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import ServiceError

__all__ = ["get_settings", "settings", "get_db", "ServiceError"]
