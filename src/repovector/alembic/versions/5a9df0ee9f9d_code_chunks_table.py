"""code chunks table

Revision ID: 5a9df0ee9f9d
Revises: acecc40082bf
Create Date: 2025-10-09 20:42:18.655276

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from pgvector.sqlalchemy import Vector

from repovector.core.config import get_settings
from repovector.models import SCHEMA, TABLE_NAME

# revision identifiers, used by Alembic.
revision: str = "5a9df0ee9f9d"
down_revision: str | None = "acecc40082bf"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute(f"create schema if not exists {SCHEMA}")

    op.create_table(
        TABLE_NAME,
        sa.Column("id", sa.String(40), primary_key=True),
        sa.Column("repository", sa.String, nullable=False),
        sa.Column("branch", sa.String, nullable=False),
        sa.Column("file_path", sa.String, nullable=False),
        sa.Column("language", sa.String, nullable=False),
        sa.Column("chunk_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("content", sa.String, nullable=False),
        sa.Column(
            "embedding", Vector(get_settings().EMBEDDING_DIMENSIONS), nullable=True
        ),
        sa.Column("created_at", sa.TIMESTAMP),
        sa.Column("updated_at", sa.TIMESTAMP),
        schema=SCHEMA,
    )

    # Searches always filter on repository and branch
    op.create_index(
        f"ix_{TABLE_NAME}_repository", TABLE_NAME, ["repository"], schema=SCHEMA
    )
    op.create_index(f"ix_{TABLE_NAME}_branch", TABLE_NAME, ["branch"], schema=SCHEMA)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(f"ix_{TABLE_NAME}_branch", table_name=TABLE_NAME, schema=SCHEMA)
    op.drop_index(f"ix_{TABLE_NAME}_repository", table_name=TABLE_NAME, schema=SCHEMA)
    op.drop_table(TABLE_NAME, schema=SCHEMA)

    op.execute(f"drop schema if exists {SCHEMA}")
