"""
Database initialization and seeding.
"""
import logging

from sqlalchemy.orm import Session

from app.db.repositories import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "default_user"


def init_db(db: Session) -> None:
    """
    Initialize database with default data.

    Args:
        db: Database session
    """
    # Schedule generation falls back to this user when the client sends none
    user = UserRepository(db).get_or_create(DEFAULT_USER_ID)
    logger.info(f"Default user ready: {user.id}")
