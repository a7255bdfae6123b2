"""Legacy Routes: the unversioned endpoints older clients still call.

Invariants:
    - GET /users lists every person
    - GET /delete/{id} deletes like DELETE /api/v0/user/{id} but answers "Ok!"
"""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse

from choreboard.api.dependencies import get_person_repository
from choreboard.core.domain_types import MAX_PERSON_ID, PersonId
from choreboard.core.repository_protocols import PersonStore
from choreboard.schemas.person import PersonResponse

router = APIRouter(tags=["legacy"])


@router.get("/users", response_model=list[PersonResponse])
async def list_persons(persons: PersonStore = Depends(get_person_repository)):
    return [PersonResponse.model_validate(p) for p in await persons.list_all()]


@router.get("/delete/{person_id}", response_class=PlainTextResponse)
async def delete_person(
    person_id: int = Path(gt=0, le=MAX_PERSON_ID),
    persons: PersonStore = Depends(get_person_repository),
):
    await persons.delete(PersonId(person_id))
    return "Ok!"
