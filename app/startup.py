from __future__ import annotations

import logging
import os

from app import auth, db, repository
from app.dependencies import Database
from app.environment import get_db_path, get_log_level
from app.models import UserRole

logger = logging.getLogger(__name__)


def bootstrap_admin(database: Database) -> None:
    email = os.getenv("NOMIRATE_ADMIN_EMAIL")
    password = os.getenv("NOMIRATE_ADMIN_PASSWORD")
    if not email or not password:
        return
    with database.session() as session:
        if repository.count_users(session) > 0:
            return
        repository.create_user(
            session,
            name="Administrator",
            email=email,
            hashed_password=auth.hash_password(password),
            role=UserRole.ADMIN,
        )
    logger.info("Created bootstrap admin %s", email)


def init_database(db_path: str | None = None) -> Database:
    path = db_path or get_db_path()
    db.run_migrations(path)
    database = Database(path)
    bootstrap_admin(database)
    return database


def configure_logging() -> None:
    level = getattr(logging, get_log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
        force=True,
    )
