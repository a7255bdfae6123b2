"""App Lifespan: startup bootstraps the store before serving, or refuses to start."""

import pytest

from choreboard.core.errors import BootstrapError
from choreboard.main import create_app, lifespan
from choreboard.services.person_repository import PersonRepository


async def test_lifespan_bootstraps_store(monkeypatch, tmp_path):
    monkeypatch.setenv("CHOREBOARD_DATABASE", str(tmp_path / "life"))
    app = create_app()

    async with lifespan(app):
        assert (tmp_path / "life.db").exists()
        assert app.state.store.created is True
        assert isinstance(app.state.persons, PersonRepository)
        person = await app.state.persons.create("Alice")
        assert person.id > 0


async def test_lifespan_refuses_to_start_on_unusable_store(monkeypatch, tmp_path):
    (tmp_path / "broken.db").write_bytes(b"x" * 4096)
    monkeypatch.setenv("CHOREBOARD_DATABASE", str(tmp_path / "broken"))
    app = create_app()

    with pytest.raises(BootstrapError):
        async with lifespan(app):
            pass
    assert not hasattr(app.state, "persons")
