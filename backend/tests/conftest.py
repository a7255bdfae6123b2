"""Root conftest: shared store, repository and HTTP client fixtures.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path, bootstrapped by open_store
    - Settings are built explicitly; the process-wide cache is cleared around each test
"""

import os

# Keep a developer's real store out of reach
os.environ.setdefault("CHOREBOARD_DATABASE", "choreboard-test")
os.environ.setdefault("CHOREBOARD_LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, insert

from choreboard.config import Settings, get_settings
from choreboard.infrastructure.database import open_store
from choreboard.main import create_app
from choreboard.models.assignment import AssignmentRow
from choreboard.models.chore import ChoreRow
from choreboard.services.person_repository import PersonRepository


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database=str(tmp_path / "choreboard"))


@pytest.fixture
async def store(settings):
    store = await open_store(settings)
    yield store
    await store.dispose()


@pytest.fixture
def repo(store) -> PersonRepository:
    return PersonRepository(store)


@pytest.fixture
def statements(store):
    """Every SQL statement sent to the store while the test runs."""
    seen: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(store.engine.sync_engine, "before_cursor_execute", _record)
    yield seen
    event.remove(store.engine.sync_engine, "before_cursor_execute", _record)


@pytest.fixture
def seed_assignment(store):
    """Insert a chore and assign it to a person; returns the chore id."""

    async def _seed(person_id: int, chore_id: int | None = None, day: int = 1) -> int:
        async with store.session() as db:
            if chore_id is None:
                result = await db.execute(
                    insert(ChoreRow.__table__).values(
                        name="Dishes", desc="Empty the rack", frequency=7,
                        discord_channel="kitchen",
                    ),
                )
                chore_id = result.inserted_primary_key[0]
            await db.execute(
                insert(AssignmentRow.__table__).values(
                    chore_id=chore_id, person_id=person_id,
                    assignment_date=day, reminder_date=day + 1,
                ),
            )
            await db.commit()
        return chore_id

    return _seed


@pytest.fixture
async def client(store, repo):
    """FastAPI test client wired to the test store (lifespan not run)."""
    app = create_app()
    app.state.store = store
    app.state.persons = repo
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
