from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from app.environment import get_db_path

logger = logging.getLogger(__name__)


def run_migrations(db_path: str | None = None) -> None:
    target_db_path = db_path or get_db_path()
    logger.info("Applying migrations to %s", target_db_path)
    command.upgrade(_alembic_config(target_db_path), "head")


def _alembic_config(db_path: str) -> Config:
    repo_root = Path(__file__).resolve().parents[1]
    config = Config(str(repo_root / "alembic.ini"))
    config.set_main_option("script_location", str(repo_root / "migrations"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    # Logging is owned by app.startup.configure_logging.
    config.attributes["configure_logger"] = False
    return config
