"""initial schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1c9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("entity", sa.String(20), nullable=False),
        sa.Column("city", sa.String(120), nullable=False, server_default=""),
        sa.Column("state", sa.String(60), nullable=False, server_default=""),
        sa.Column("markup_type", sa.String(10), nullable=True),
        sa.Column("markup_value", sa.Numeric(12, 2), nullable=True),
        sa.Column("commission", sa.Numeric(5, 2), nullable=True),
        sa.Column("internal_notes", sa.Text, nullable=False, server_default=""),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "service_providers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(40), nullable=False, server_default=""),
        sa.Column("services", sa.Text, nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "bills",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("bill_number", sa.String(32), nullable=False, unique=True),
        sa.Column("sequence", sa.Integer, nullable=False, unique=True),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("provider_id", sa.Integer, sa.ForeignKey("service_providers.id"), nullable=False),
        sa.Column("service", sa.String(255), nullable=False),
        sa.Column("hours_worked", sa.Numeric(8, 2), nullable=False),
        sa.Column("service_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_client", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_provider", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(10), nullable=False, server_default="Pending"),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("paid_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_bills_status", "bills", ["status"])
    op.create_index("ix_bills_client_id", "bills", ["client_id"])
    op.create_index("ix_bills_created_at", "bills", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_bills_created_at", table_name="bills")
    op.drop_index("ix_bills_client_id", table_name="bills")
    op.drop_index("ix_bills_status", table_name="bills")
    op.drop_table("bills")
    op.drop_table("service_providers")
    op.drop_table("clients")
