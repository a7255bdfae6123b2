"""Person Schemas: Pydantic models with field-level validation for the person API.

Invariants:
    - PersonCreate.name: 1-100 chars after strip
    - discord_tag: at most 64 chars, may be null
    - ids: 1 .. 2**63-1, the SQLite INTEGER range
    - PersonPatch keeps "omitted" and "explicit null" apart (model_fields_set)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from choreboard.core.domain_types import MAX_PERSON_ID, UNSET, PersonUpdate


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class PersonCreate(BaseModel):
    """New person request."""
    name: str = Field(min_length=1, max_length=100)
    discord_tag: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class PersonPatch(BaseModel):
    """Partial update request. Only fields present in the body are applied."""
    id: int = Field(gt=0, le=MAX_PERSON_ID)
    name: str | None = Field(None, min_length=1, max_length=100)
    discord_tag: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("name cannot be null")
        return _strip_name(v)

    def to_update(self) -> PersonUpdate:
        sent = self.model_fields_set
        return PersonUpdate(
            name=self.name if "name" in sent else UNSET,
            discord_tag=self.discord_tag if "discord_tag" in sent else UNSET,
        )


class PersonResponse(BaseModel):
    """Person response: public-facing person data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    discord_tag: str | None = None


class UpdateResult(BaseModel):
    updated: int
