"""Person Repository: create, fetch, partial update and cascade delete for persons.

Invariants:
    - Constructed once at startup with the process-wide Store and injected into routes
    - Expected failures surface as NotFoundError or PersistenceError, never anything else
    - update() writes only what plan_person_update returns; an empty plan is zero writes
    - delete() removes the person row and its chores_persons rows in ONE transaction
    - get_by_name() returns every match, ordered by id

Design Decisions:
    - SQLAlchemy Core statements on the mapped tables over ORM unit-of-work:
      each statement is one round trip whose rowcount we can check
    - Store.session() opens the transaction; the two deletes share it and a raise
      between them rolls both back
    - Deleted ids are not remembered: a later operation on them fails with
      NotFoundError because the row is gone
"""

import logging

from sqlalchemy import Update, delete, insert, select, update

from choreboard.core.domain_types import MAX_PERSON_ID, Person, PersonId, PersonUpdate
from choreboard.core.errors import NotFoundError
from choreboard.core.partial_update import PERSON_COLUMNS, Change, plan_person_update
from choreboard.infrastructure.database import Store
from choreboard.models.assignment import AssignmentRow
from choreboard.models.person import PersonRow

logger = logging.getLogger(__name__)

person_table = PersonRow.__table__
assignment_table = AssignmentRow.__table__

_PERSON_FIELDS = (person_table.c.id, person_table.c.name, person_table.c.discord_tag)


def build_update_statement(person_id: int, changes: list[Change]) -> Update:
    """One parameterized UPDATE ... SET <changes> WHERE id = :id."""
    if not changes:
        raise ValueError("refusing to build an UPDATE with no assignments")
    unknown = [column for column, _ in changes if column not in PERSON_COLUMNS]
    if unknown:
        raise ValueError(f"unknown person columns: {', '.join(unknown)}")
    return (
        update(person_table)
        .where(person_table.c.id == person_id)
        .ordered_values(*changes)
    )


def _to_person(row) -> Person:
    return Person(id=PersonId(row.id), name=row.name, discord_tag=row.discord_tag)


def _require_storable(person_id: PersonId) -> None:
    # Ids are positive and fit SQLite INTEGER; the driver cannot bind larger ints
    if not 0 < person_id <= MAX_PERSON_ID:
        raise NotFoundError("Person", person_id)


class PersonRepository:
    """Person persistence over a shared Store."""

    def __init__(self, store: Store):
        self._store = store

    async def create(self, name: str, discord_tag: str | None = None) -> Person:
        person = Person(name=name, discord_tag=discord_tag)
        async with self._store.session() as db:
            result = await db.execute(
                insert(person_table).values(
                    name=person.name, discord_tag=person.discord_tag,
                ),
            )
            new_id = result.inserted_primary_key[0]
            await db.commit()
        created = person.with_id(new_id)
        logger.info("Person created", extra={"person_id": created.id})
        return created

    async def get_by_id(self, person_id: PersonId) -> Person:
        _require_storable(person_id)
        async with self._store.session() as db:
            result = await db.execute(
                select(*_PERSON_FIELDS).where(person_table.c.id == person_id),
            )
            row = result.one_or_none()
        if row is None:
            raise NotFoundError("Person", person_id)
        return _to_person(row)

    async def get_by_name(self, name: str) -> list[Person]:
        async with self._store.session() as db:
            result = await db.execute(
                select(*_PERSON_FIELDS)
                .where(person_table.c.name == name)
                .order_by(person_table.c.id),
            )
            return [_to_person(row) for row in result.all()]

    async def list_all(self) -> list[Person]:
        async with self._store.session() as db:
            result = await db.execute(
                select(*_PERSON_FIELDS).order_by(person_table.c.id),
            )
            return [_to_person(row) for row in result.all()]

    async def update(self, person_id: PersonId, request: PersonUpdate) -> int:
        """Apply the changed fields of `request`. Returns rows written (0 for a no-op)."""
        current = await self.get_by_id(person_id)
        changes = plan_person_update(current, request)
        if not changes:
            logger.debug("Update is a no-op", extra={"person_id": person_id})
            return 0

        async with self._store.session() as db:
            result = await db.execute(build_update_statement(person_id, changes))
            written = result.rowcount
            if written == 0:
                raise NotFoundError("Person", person_id)
            await db.commit()

        logger.info(
            f"Person updated: {', '.join(column for column, _ in changes)}",
            extra={"person_id": person_id},
        )
        return written

    async def delete(self, person_id: PersonId) -> None:
        """Delete the person and every chores_persons row that references it."""
        _require_storable(person_id)
        async with self._store.session() as db:
            deleted = await db.execute(
                delete(person_table).where(person_table.c.id == person_id),
            )
            if deleted.rowcount == 0:
                raise NotFoundError("Person", person_id)
            # Cascade over the relationships
            await db.execute(
                delete(assignment_table).where(assignment_table.c.person_id == person_id),
            )
            await db.commit()
        logger.info("Person deleted", extra={"person_id": person_id})
