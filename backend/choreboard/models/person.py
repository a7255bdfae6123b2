"""Person ORM: one row per person who can be assigned chores.

Invariants:
    - id is an autoincrement integer primary key, assigned by the store
    - name is non-nullable text; discord_tag is nullable
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from choreboard.db.base import Base


class PersonRow(Base):
    """Persisted person."""
    __tablename__ = "person"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    discord_tag: Mapped[str | None] = mapped_column(Text, nullable=True)
