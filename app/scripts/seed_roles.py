"""
Create the default and admin roles if they are missing. Registration fails until this
(or the initial migration) has run.

  python -m app.scripts.seed_roles
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.roles import RoleDirectory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Ensure seed roles exist."""
    settings = get_settings()
    db = SessionLocal()
    try:
        created = RoleDirectory(db).ensure_seed_roles(settings)
        logger.info("Seed roles ensured: created=%s", [role.value for role in created])
        return 0
    except Exception as e:
        logger.exception("Seeding roles failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
