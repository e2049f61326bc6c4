from __future__ import annotations

import sqlite3

import pytest
from alembic import command

from app import db


def _connect(path) -> sqlite3.Connection:
    connection = sqlite3.connect(path)
    connection.row_factory = sqlite3.Row
    return connection


def test_run_migrations_creates_all_tables(tmp_path) -> None:
    db_path = tmp_path / "migrations.db"
    db.run_migrations(str(db_path))

    connection = _connect(db_path)
    try:
        tables = {
            row["name"]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
    finally:
        connection.close()

    assert {
        "alembic_version",
        "users",
        "sessions",
        "departments",
        "impact_areas",
        "positions",
        "districts",
        "institutions",
        "nominees",
        "rating_categories",
        "institution_rating_categories",
        "nominee_ratings",
        "institution_ratings",
        "comments",
    } <= tables


def test_run_migrations_is_idempotent(tmp_path) -> None:
    db_path = tmp_path / "twice.db"

    db.run_migrations(str(db_path))
    db.run_migrations(str(db_path))

    connection = _connect(db_path)
    try:
        versions = connection.execute("SELECT version_num FROM alembic_version").fetchall()
    finally:
        connection.close()
    assert len(versions) == 1


def test_lookup_names_are_unique_case_insensitively(tmp_path) -> None:
    db_path = tmp_path / "unique.db"
    db.run_migrations(str(db_path))

    connection = _connect(db_path)
    try:
        connection.execute(
            "INSERT INTO positions (name, name_key) VALUES ('Chairman', 'chairman')"
        )
        with pytest.raises(sqlite3.IntegrityError):
            connection.execute(
                "INSERT INTO positions (name, name_key) VALUES ('CHAIRMAN', 'chairman')"
            )
        with pytest.raises(sqlite3.IntegrityError):
            connection.execute("INSERT INTO positions (name) VALUES ('Treasurer')")

        indexes = {
            row["name"]
            for row in connection.execute("PRAGMA index_list('districts')").fetchall()
        }
    finally:
        connection.close()
    assert "uq_districts_name_key" in indexes


def test_name_key_migration_backfills_existing_rows(tmp_path) -> None:
    db_path = tmp_path / "backfill.db"
    config = db._alembic_config(str(db_path))
    command.upgrade(config, "0001_initial_schema")

    connection = _connect(db_path)
    try:
        connection.execute("INSERT INTO institutions (name) VALUES ('  Ärztekammer ')")
        connection.commit()
    finally:
        connection.close()

    db.run_migrations(str(db_path))

    connection = _connect(db_path)
    try:
        row = connection.execute("SELECT name_key FROM institutions").fetchone()
    finally:
        connection.close()
    assert row["name_key"] == "ärztekammer"
