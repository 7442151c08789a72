import argparse
import logging

from sqlalchemy import delete

from app.core.exceptions import ValidationFailed
from app.core.logging import setup_logging
from app.database import create_schema, session_scope
from app.models.user import User
from app.schemas.user import UserRegister
from app.services.user_service import register_user

logger = logging.getLogger(__name__)

DEFAULT_USERS = (
    UserRegister(username="admin", email="admin@pharmacy.com", password="admin123", role="admin"),
    UserRegister(username="testuser", email="test@pharmacy.com", password="test123", role="pharmacist"),
)


def parse_args():
    parser = argparse.ArgumentParser(description="Create the default admin and pharmacist accounts.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every existing user first.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    create_schema()

    with session_scope() as db:
        if args.reset:
            db.execute(delete(User))
            db.commit()
            logger.info("Existing users removed.")

        for payload in DEFAULT_USERS:
            try:
                user = register_user(db, payload)
            except ValidationFailed:
                logger.info("Skipping %s: already exists", payload.email)
                continue
            logger.info("Created %s (%s)", user.email, user.role)


if __name__ == "__main__":
    main()
