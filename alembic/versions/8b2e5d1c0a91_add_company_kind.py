"""add kind to clients

Revision ID: 8b2e5d1c0a91
Revises: 3f1c9a2b7d40
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "8b2e5d1c0a91"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("clients", sa.Column("kind", sa.String(10), nullable=False, server_default="client"))
    op.create_index("ix_clients_kind", "clients", ["kind"])


def downgrade() -> None:
    op.drop_index("ix_clients_kind", table_name="clients")
    op.drop_column("clients", "kind")
