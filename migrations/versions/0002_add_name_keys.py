"""add_name_keys

Revision ID: 0002_add_name_keys
Revises: 0001_initial_schema
Create Date: 2025-02-10 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_add_name_keys"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None

NAMED_TABLES = ("departments", "impact_areas", "positions", "districts", "institutions")


def upgrade() -> None:
    bind = op.get_bind()
    for table_name in NAMED_TABLES:
        op.drop_index(f"uq_{table_name}_name_lower", table_name=table_name)
        with op.batch_alter_table(table_name) as batch_op:
            batch_op.add_column(sa.Column("name_key", sa.Text(), nullable=True))

        # SQLite lower() folds ASCII only.
        rows = (
            bind.execute(sa.text(f"SELECT id, name FROM {table_name}")).mappings().all()
        )
        for row in rows:
            bind.execute(
                sa.text(f"UPDATE {table_name} SET name_key = :name_key WHERE id = :id"),
                {"name_key": str(row["name"]).strip().casefold(), "id": int(row["id"])},
            )

        with op.batch_alter_table(table_name) as batch_op:
            batch_op.alter_column("name_key", existing_type=sa.Text(), nullable=False)
        op.create_index(
            f"uq_{table_name}_name_key", table_name, ["name_key"], unique=True
        )


def downgrade() -> None:
    for table_name in NAMED_TABLES:
        op.drop_index(f"uq_{table_name}_name_key", table_name=table_name)
        with op.batch_alter_table(table_name) as batch_op:
            batch_op.drop_column("name_key")
        op.create_index(
            f"uq_{table_name}_name_lower",
            table_name,
            [sa.text("lower(name)")],
            unique=True,
        )
