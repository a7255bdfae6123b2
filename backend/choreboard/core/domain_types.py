"""Domain Types: value objects for persons and their chore records.

Invariants:
    - Person.id == 0 means transient (never inserted); persisted ids are > 0
    - Person values are immutable; insert returns a new value with the assigned id
    - UNSET marks a field omitted from an update request, distinct from None
    - No stored id exceeds MAX_PERSON_ID; larger ids can never match a row

Design Decisions:
    - Frozen dataclasses over ORM instances: core logic never touches a session
    - Chore and Assignment carry shape only; no operations act on them yet
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PersonId = NewType("PersonId", int)
ChoreId = NewType("ChoreId", int)
AssignmentId = NewType("AssignmentId", int)

TRANSIENT_ID = PersonId(0)
# SQLite INTEGER is a signed 64-bit value
MAX_PERSON_ID = PersonId(2**63 - 1)


# ─── Sentinel ────────────────────────────────────────────────────

class _Unset(Enum):
    """Marker for a field that was not part of the request."""
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Person:
    """A person who can be assigned chores."""
    name: str
    discord_tag: str | None = None
    id: PersonId = TRANSIENT_ID

    @property
    def is_persisted(self) -> bool:
        return self.id != TRANSIENT_ID

    def with_id(self, person_id: int) -> "Person":
        return replace(self, id=PersonId(person_id))


@dataclass(frozen=True)
class PersonUpdate:
    """Requested changes for one person. Omitted fields stay UNSET."""
    name: str | _Unset = UNSET
    discord_tag: str | None | _Unset = UNSET

    @property
    def is_empty(self) -> bool:
        return self.name is UNSET and self.discord_tag is UNSET


@dataclass(frozen=True)
class Chore:
    id: ChoreId
    name: str
    desc: str
    frequency: int
    discord_channel: str


@dataclass(frozen=True)
class Assignment:
    """A chore handed to a person, with day-count dates."""
    id: AssignmentId
    chore_id: ChoreId
    person_id: PersonId
    assignment_date: int
    reminder_date: int | None
    completion_date: int | None
    completed_person: PersonId | None
