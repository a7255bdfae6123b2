"""Person Routes: HTTP adapter over the repository.

Invariants exercised:
    - POST returns 201 with the stored person
    - PATCH distinguishes omitted fields from explicit nulls
    - NotFoundError → 404, validation errors → 400 with field details
    - PersistenceError → 503 with the failed operation and Retry-After
    - ids beyond the 64-bit range are rejected before reaching the store
    - legacy /users and /delete/{id} keep working
"""

import pytest
from httpx import ASGITransport, AsyncClient

from choreboard.core.errors import PersistenceError
from choreboard.main import create_app


async def _create(client, name="Bob", discord_tag="bob#1234") -> dict:
    res = await client.post(
        "/api/v0/user", json={"name": name, "discord_tag": discord_tag},
    )
    assert res.status_code == 201
    return res.json()


async def test_create_returns_person(client):
    body = await _create(client)
    assert body["id"] > 0
    assert body["name"] == "Bob"
    assert body["discord_tag"] == "bob#1234"


async def test_create_strips_name(client):
    body = await _create(client, name="  Alice  ", discord_tag=None)
    assert body["name"] == "Alice"
    assert body["discord_tag"] is None


@pytest.mark.parametrize("payload", [{}, {"name": "   "}, {"name": "x" * 101}])
async def test_create_rejects_invalid_name(client, payload):
    res = await client.post("/api/v0/user", json=payload)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_by_id(client):
    created = await _create(client)
    res = await client.get(f"/api/v0/user/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_missing_returns_404(client):
    res = await client.get("/api/v0/user/12345")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_find_by_name_lists_all_matches(client):
    first = await _create(client, discord_tag="a#1")
    second = await _create(client, discord_tag="a#2")
    await _create(client, name="Eve")

    res = await client.get("/api/v0/user", params={"name": "Bob"})
    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [first["id"], second["id"]]


async def test_find_by_name_without_match_is_empty_list(client):
    res = await client.get("/api/v0/user", params={"name": "Nobody"})
    assert res.status_code == 200
    assert res.json() == []


async def test_patch_identical_values_writes_nothing(client):
    created = await _create(client)
    res = await client.patch(
        "/api/v0/user",
        json={"id": created["id"], "name": "Bob", "discord_tag": "bob#1234"},
    )
    assert res.status_code == 200
    assert res.json() == {"updated": 0}


async def test_patch_omitted_name_is_kept(client):
    created = await _create(client)
    res = await client.patch(
        "/api/v0/user", json={"id": created["id"], "discord_tag": "new#0001"},
    )
    assert res.json() == {"updated": 1}

    fetched = (await client.get(f"/api/v0/user/{created['id']}")).json()
    assert fetched["name"] == "Bob"
    assert fetched["discord_tag"] == "new#0001"


async def test_patch_explicit_null_clears_tag(client):
    created = await _create(client)
    await client.patch(
        "/api/v0/user", json={"id": created["id"], "discord_tag": None},
    )
    fetched = (await client.get(f"/api/v0/user/{created['id']}")).json()
    assert fetched["discord_tag"] is None
    assert fetched["name"] == "Bob"


async def test_patch_null_name_is_rejected(client):
    created = await _create(client)
    res = await client.patch("/api/v0/user", json={"id": created["id"], "name": None})
    assert res.status_code == 400


async def test_patch_missing_person_returns_404(client):
    res = await client.patch("/api/v0/user", json={"id": 999, "name": "Ghost"})
    assert res.status_code == 404


async def test_delete_then_get_returns_404(client):
    created = await _create(client)
    res = await client.delete(f"/api/v0/user/{created['id']}")
    assert res.status_code == 204

    assert (await client.get(f"/api/v0/user/{created['id']}")).status_code == 404
    assert (await client.delete(f"/api/v0/user/{created['id']}")).status_code == 404


async def test_legacy_users_lists_everyone(client):
    bob = await _create(client)
    eve = await _create(client, name="Eve", discord_tag=None)
    res = await client.get("/users")
    assert res.status_code == 200
    assert res.json() == [bob, eve]


async def test_legacy_delete(client):
    created = await _create(client)
    res = await client.get(f"/delete/{created['id']}")
    assert res.status_code == 200
    assert res.text == "Ok!"
    assert (await client.get(f"/delete/{created['id']}")).status_code == 404


async def test_readiness_probe(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_liveness_probe(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


@pytest.mark.parametrize("path", [
    f"/api/v0/user/{2**63}", f"/delete/{2**63}", "/api/v0/user/0",
])
async def test_out_of_range_path_id_is_rejected(client, path):
    res = await client.get(path)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_out_of_range_delete_and_patch_are_rejected(client):
    assert (await client.delete(f"/api/v0/user/{2**63}")).status_code == 400
    res = await client.patch("/api/v0/user", json={"id": 2**63, "name": "Ghost"})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.id"


async def test_largest_id_is_a_plain_404(client):
    res = await client.get(f"/api/v0/user/{2**63 - 1}")
    assert res.status_code == 404


class _UnavailablePersons:
    async def list_all(self):
        raise PersistenceError("database is locked", "execute")


async def test_persistence_error_returns_503_with_operation():
    app = create_app()
    app.state.persons = _UnavailablePersons()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.get("/users")

    assert res.status_code == 503
    assert res.headers["retry-after"] == "1"
    error = res.json()["error"]
    assert error["code"] == "PERSISTENCE_ERROR"
    assert error["context"]["operation"] == "execute"
