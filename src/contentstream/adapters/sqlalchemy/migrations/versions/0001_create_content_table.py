"""Create the content table.

Revision ID: 0001_create_content
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_create_content"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "content",
        sa.Column("address", sa.String(length=64), nullable=False),
        sa.Column("payload", sa.LargeBinary(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "size = length(payload)", name=op.f("ck_content_size_matches_payload")
        ),
        sa.PrimaryKeyConstraint("address", name=op.f("pk_content")),
    )


def downgrade() -> None:
    op.drop_table("content")
