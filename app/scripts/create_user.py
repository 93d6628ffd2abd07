"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [--admin]
Example:
  python -m app.scripts.create_user admin@example.com s3cret --admin
Seed roles must exist (alembic upgrade head, or python -m app.scripts.seed_roles).
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import ServiceError
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.services.roles import RoleDirectory
from app.services.users import UserDirectory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a user with the default role.")
    parser.add_argument("email", help="User e-mail")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--admin", action="store_true", help="Also grant the admin role")
    args = parser.parse_args()

    email = args.email.strip()
    if not email or "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    db = SessionLocal()
    try:
        users = UserDirectory(db, RoleDirectory(db), default_role_value=settings.DEFAULT_ROLE_VALUE)
        user = users.create_user(email, hash_password(args.password))
        if args.admin:
            user = users.attach_role(user.id, settings.ADMIN_ROLE_VALUE)
        roles = ", ".join(role.value for role in user.roles)
        logger.info("Created user '%s' (id=%s) with roles: %s", email, user.id, roles)
        return 0
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
