"""Assignment ORM: join rows between persons and chores (table chores_persons).

Invariants:
    - chore_id and person_id reference rows that existed when the assignment was made
    - person_id is indexed: deleting a person removes its rows by that column
    - completed_person may differ from person_id
    - Dates are day counts (integers), not timestamps

Design Decisions:
    - ON DELETE CASCADE on person_id mirrors the repository's explicit
      transactional cascade, so a raw delete cannot leave dangling rows either
"""

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from choreboard.db.base import Base


class AssignmentRow(Base):
    """Person-chore assignment with its reminder and completion days."""
    __tablename__ = "chores_persons"
    __table_args__ = (
        Index("ix_chores_persons_person_id", "person_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chore_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chore.id", ondelete="CASCADE"), nullable=False,
    )
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("person.id", ondelete="CASCADE"), nullable=False,
    )
    assignment_date: Mapped[int] = mapped_column(Integer, nullable=False)
    reminder_date: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completion_date: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed_person: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("person.id", ondelete="SET NULL"), nullable=True,
    )
