"""Initial schema with work_queue table

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "work_queue",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("customer_name", sa.Text, nullable=False),
        sa.Column("discord_id", sa.Text, nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("deadline", sa.Date, nullable=False),
        sa.Column(
            "status",
            sa.String(32),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price > 0", name="ck_work_queue_price_positive"),
    )

    # Index for the board ordering
    op.create_index(
        "ix_work_queue_deadline_created",
        "work_queue",
        ["deadline", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_work_queue_deadline_created", table_name="work_queue")
    op.drop_table("work_queue")
