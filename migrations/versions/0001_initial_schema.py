"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-02-03 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def _category_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("keyword", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("icon", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "description", sa.Text(), nullable=False, server_default=sa.text("''")
        ),
        sa.Column("weight", sa.Float(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("hashed_password", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'User'")),
        sa.Column(
            "is_active", sa.Integer(), nullable=False, server_default=sa.text("1")
        ),
        *_timestamps(),
        sa.CheckConstraint("role IN ('User', 'Admin')", name="ck_users_role"),
    )
    op.create_table(
        "sessions",
        sa.Column("token", sa.Text(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    for table_name in ("departments", "impact_areas", "positions"):
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.Text(), nullable=False),
            *_timestamps(),
        )
    op.create_table(
        "districts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("region", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "institutions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("image", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "nominees",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column(
            "position_id", sa.Integer(), sa.ForeignKey("positions.id"), nullable=False
        ),
        sa.Column(
            "institution_id",
            sa.Integer(),
            sa.ForeignKey("institutions.id"),
            nullable=False,
        ),
        sa.Column(
            "district_id", sa.Integer(), sa.ForeignKey("districts.id"), nullable=False
        ),
        sa.Column("status", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("evidence", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table("rating_categories", *_category_columns())
    op.create_table("institution_rating_categories", *_category_columns())
    op.create_table(
        "nominee_ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "nominee_id", sa.Integer(), sa.ForeignKey("nominees.id"), nullable=False
        ),
        sa.Column(
            "rating_category_id",
            sa.Integer(),
            sa.ForeignKey("rating_categories.id"),
            nullable=False,
        ),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("evidence", sa.Text(), nullable=True),
        sa.Column("severity", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "score >= 0 AND score <= 5", name="ck_nominee_ratings_score"
        ),
    )
    op.create_table(
        "institution_ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "institution_id",
            sa.Integer(),
            sa.ForeignKey("institutions.id"),
            nullable=False,
        ),
        sa.Column(
            "rating_category_id",
            sa.Integer(),
            sa.ForeignKey("institution_rating_categories.id"),
            nullable=False,
        ),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("evidence", sa.Text(), nullable=True),
        sa.Column("severity", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "score >= 0 AND score <= 5", name="ck_institution_ratings_score"
        ),
    )
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "nominee_id", sa.Integer(), sa.ForeignKey("nominees.id"), nullable=True
        ),
        sa.Column(
            "institution_id",
            sa.Integer(),
            sa.ForeignKey("institutions.id"),
            nullable=True,
        ),
        *_timestamps(),
    )

    op.create_index(
        "uq_users_email_lower", "users", [sa.text("lower(email)")], unique=True
    )
    for table_name in ("departments", "impact_areas", "positions", "districts", "institutions"):
        op.create_index(
            f"uq_{table_name}_name_lower",
            table_name,
            [sa.text("lower(name)")],
            unique=True,
        )
    op.create_index("ix_nominees_institution_id", "nominees", ["institution_id"])
    op.create_index("ix_nominee_ratings_nominee_id", "nominee_ratings", ["nominee_id"])
    op.create_index(
        "ix_institution_ratings_institution_id",
        "institution_ratings",
        ["institution_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_institution_ratings_institution_id", table_name="institution_ratings")
    op.drop_index("ix_nominee_ratings_nominee_id", table_name="nominee_ratings")
    op.drop_index("ix_nominees_institution_id", table_name="nominees")
    for table_name in ("departments", "impact_areas", "positions", "districts", "institutions"):
        op.drop_index(f"uq_{table_name}_name_lower", table_name=table_name)
    op.drop_index("uq_users_email_lower", table_name="users")
    for table_name in (
        "comments",
        "institution_ratings",
        "nominee_ratings",
        "institution_rating_categories",
        "rating_categories",
        "nominees",
        "institutions",
        "districts",
        "positions",
        "impact_areas",
        "departments",
        "sessions",
        "users",
    ):
        op.drop_table(table_name)
