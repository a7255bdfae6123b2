"""Partial Update: decides which person columns an update request actually changes.

Invariants:
    - A field omitted from the request (UNSET) is never written
    - A field whose requested value equals the stored value is never written
    - Column order is fixed: name before discord_tag
    - An empty change list means "no write at all"
"""

from choreboard.core.domain_types import UNSET, Person, PersonUpdate

PERSON_COLUMNS = ("name", "discord_tag")

Change = tuple[str, object]


def plan_person_update(current: Person, request: PersonUpdate) -> list[Change]:
    """Return the ordered (column, value) pairs that differ from `current`."""
    if request.is_empty:
        return []

    changes: list[Change] = []
    for column in PERSON_COLUMNS:
        requested = getattr(request, column)
        if requested is UNSET:
            continue
        # None is a real value here: an explicit null clears a stored tag
        if requested != getattr(current, column):
            changes.append((column, requested))
    return changes
