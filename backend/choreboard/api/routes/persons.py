"""Person Routes: HTTP binding for the person repository.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - NotFoundError / PersistenceError propagate to the global handlers (404 / 503)
    - PATCH applies only the fields present in the body
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, Response, status

from choreboard.api.dependencies import get_person_repository
from choreboard.core.domain_types import MAX_PERSON_ID, PersonId
from choreboard.core.repository_protocols import PersonStore
from choreboard.schemas.person import (
    PersonCreate, PersonPatch, PersonResponse, UpdateResult,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v0/user", tags=["persons"])


@router.post(
    "", response_model=PersonResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_person(
    body: PersonCreate, persons: PersonStore = Depends(get_person_repository),
):
    """Insert a new person."""
    person = await persons.create(body.name, body.discord_tag)
    logger.debug(f"New person inserted {person!r}")
    return PersonResponse.model_validate(person)


@router.patch("", response_model=UpdateResult)
async def update_person(
    body: PersonPatch, persons: PersonStore = Depends(get_person_repository),
):
    """Apply a partial update; unchanged values are not written."""
    updated = await persons.update(PersonId(body.id), body.to_update())
    return UpdateResult(updated=updated)


@router.get("", response_model=list[PersonResponse])
async def find_persons_by_name(
    name: str = Query(min_length=1),
    persons: PersonStore = Depends(get_person_repository),
):
    """All persons with exactly this name, oldest first."""
    return [
        PersonResponse.model_validate(p) for p in await persons.get_by_name(name)
    ]


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: int = Path(gt=0, le=MAX_PERSON_ID),
    persons: PersonStore = Depends(get_person_repository),
):
    return PersonResponse.model_validate(
        await persons.get_by_id(PersonId(person_id)),
    )


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(
    person_id: int = Path(gt=0, le=MAX_PERSON_ID),
    persons: PersonStore = Depends(get_person_repository),
):
    """Delete a person and its chore assignments."""
    await persons.delete(PersonId(person_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
