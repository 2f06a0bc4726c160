"""create resources table

Revision ID: 0001
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("collection_key", sa.String(length=2048), nullable=False),
        sa.Column("collection", sa.String(length=2048), nullable=False),
        sa.Column("name", sa.String(length=2048), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_on", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_resources_collection_key", "resources", ["collection_key"])


def downgrade() -> None:
    op.drop_index("ix_resources_collection_key", table_name="resources")
    op.drop_table("resources")
