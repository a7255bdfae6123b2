"""Boundary Protocols: contracts between the HTTP shell and the persistence layer.

Invariants:
    - Routes depend on PersonStore, never on the SQLAlchemy implementation
    - Every method is async because implementations do IO

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol

from choreboard.core.domain_types import Person, PersonId, PersonUpdate


class PersonStore(Protocol):
    """Contract for person persistence, implemented by PersonRepository."""
    async def create(self, name: str, discord_tag: str | None = None) -> Person: ...
    async def get_by_id(self, person_id: PersonId) -> Person: ...
    async def get_by_name(self, name: str) -> list[Person]: ...
    async def list_all(self) -> list[Person]: ...
    async def update(self, person_id: PersonId, request: PersonUpdate) -> int: ...
    async def delete(self, person_id: PersonId) -> None: ...
