"""Index chores_persons.person_id for the person delete cascade.

Revision ID: 0002_person_index
Revises: 0001_initial
Create Date: 2026-10-19

Deleting a person removes its join rows by person_id; without the index that
is a full scan of chores_persons per delete.
"""
from typing import Sequence, Union

from alembic import op

revision: str = "0002_person_index"
down_revision: Union[str, None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_index(
        "ix_chores_persons_person_id", "chores_persons", ["person_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_chores_persons_person_id", table_name="chores_persons")
