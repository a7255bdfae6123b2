"""Domain Types: Person lifecycle values and the UNSET sentinel."""

from choreboard.core.domain_types import (
    TRANSIENT_ID, UNSET, Person, PersonUpdate,
)


def test_new_person_is_transient():
    person = Person(name="Alice")
    assert person.id == TRANSIENT_ID == 0
    assert not person.is_persisted
    assert person.discord_tag is None


def test_with_id_returns_persisted_copy():
    person = Person(name="Alice", discord_tag="alice#1")
    saved = person.with_id(3)
    assert saved.is_persisted
    assert saved.id == 3
    assert saved.name == "Alice"
    assert person.id == 0


def test_unset_is_falsy_and_distinct_from_none():
    assert not UNSET
    assert UNSET is not None
    assert repr(UNSET) == "UNSET"


def test_update_emptiness():
    assert PersonUpdate().is_empty
    assert not PersonUpdate(discord_tag=None).is_empty
    assert not PersonUpdate(name="Bob").is_empty
