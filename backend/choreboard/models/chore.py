"""Chore ORM: a recurring task posted to a Discord channel.

Invariants:
    - frequency is a recurrence interval in days, read by an external scheduler
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from choreboard.db.base import Base


class ChoreRow(Base):
    __tablename__ = "chore"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    desc: Mapped[str] = mapped_column(Text, nullable=False, default="")
    frequency: Mapped[int] = mapped_column(Integer, nullable=False)
    discord_channel: Mapped[str] = mapped_column(Text, nullable=False)
