"""Initial schema: person, chore, chores_persons.

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "person",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("discord_tag", sa.Text, nullable=True),
    )

    op.create_table(
        "chore",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("desc", sa.Text, nullable=False, server_default=""),
        sa.Column("frequency", sa.Integer, nullable=False),
        sa.Column("discord_channel", sa.Text, nullable=False),
    )

    op.create_table(
        "chores_persons",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "chore_id", sa.Integer,
            sa.ForeignKey("chore.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "person_id", sa.Integer,
            sa.ForeignKey("person.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("assignment_date", sa.Integer, nullable=False),
        sa.Column("reminder_date", sa.Integer, nullable=True),
        sa.Column("completion_date", sa.Integer, nullable=True),
        sa.Column(
            "completed_person", sa.Integer,
            sa.ForeignKey("person.id", ondelete="SET NULL"), nullable=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("chores_persons")
    op.drop_table("chore")
    op.drop_table("person")
