"""create allowed_pubkeys

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "allowed_pubkeys",
        sa.Column("pubkey", sa.String(64), primary_key=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()
        ),
    )
    op.create_index("ix_allowed_pubkeys_created_at", "allowed_pubkeys", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_allowed_pubkeys_created_at", table_name="allowed_pubkeys")
    op.drop_table("allowed_pubkeys")
