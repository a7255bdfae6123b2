"""Request Dependencies: hand the startup-built Store and repository to routes.

Invariants:
    - Store and PersonRepository are created once in the lifespan and live on app.state
    - Routes receive them through Depends, never through module globals
"""

from fastapi import Request

from choreboard.core.repository_protocols import PersonStore
from choreboard.infrastructure.database import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_person_repository(request: Request) -> PersonStore:
    return request.app.state.persons
