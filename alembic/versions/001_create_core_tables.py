"""Create users, notes and daily_earnings tables

Revision ID: 001
Revises: None
Create Date: 2024-03-01 00:00:00.000000+00:00

What:  Initial schema: the three independent tables the API reads and writes.
How:   The unique constraints back the ON CONFLICT upserts in NoteService and
       EarningsService.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column(
            "password",
            sa.String(255),
            nullable=False,
            comment="passlib hash; never returned by the API",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date_key", sa.Date(), nullable=False, comment="Calendar day this note belongs to"),
        sa.Column("note_content", sa.Text(), nullable=False, comment="Free-form note text"),
        sa.Column("user_name", sa.String(100), nullable=False, comment="Owner of the note"),
        sa.PrimaryKeyConstraint("id"),
        # One note per user per day; conflict target of the save upsert
        sa.UniqueConstraint("user_name", "date_key", name="uq_notes_user_date"),
    )
    op.create_index("idx_notes_date_key", "notes", ["date_key"])

    op.create_table(
        "daily_earnings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("record_date", sa.Date(), nullable=False),
        sa.Column("daily_wage", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("overtime_pay", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("allowance", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="Last time this row was written (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
        # One row per user per day; conflict target of the save upsert
        sa.UniqueConstraint("user_id", "record_date", name="uq_daily_earnings_user_date"),
    )
    op.create_index("idx_daily_earnings_record_date", "daily_earnings", ["record_date"])


def downgrade() -> None:
    op.drop_index("idx_daily_earnings_record_date", table_name="daily_earnings")
    op.drop_table("daily_earnings")
    op.drop_index("idx_notes_date_key", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
