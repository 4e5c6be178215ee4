"""Pin API tests."""

import uuid

import pytest


async def _create_pin(client, headers, name="Tokyo Station", lat=35.6812, lng=139.7671):
    r = await client.post(
        "/api/v1/pins",
        json={"name": name, "latitude": lat, "longitude": lng},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_pins_require_auth(client):
    r = await client.get("/api/v1/pins")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_create_and_list(client, register):
    user, headers = await register()
    first = await _create_pin(client, headers, name="first")
    second = await _create_pin(client, headers, name="second", lat=-33.86, lng=151.21)
    assert first["user_id"] == user["id"]
    assert second["latitude"] == -33.86
    assert second["longitude"] == 151.21

    r = await client.get("/api/v1/pins", headers=headers)
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_empty(client, register):
    _, headers = await register()
    r = await client.get("/api/v1/pins", headers=headers)
    assert r.json() == []


@pytest.mark.asyncio
async def test_create_out_of_range(client, register):
    _, headers = await register()
    r = await client.post(
        "/api/v1/pins",
        json={"name": "Edge", "latitude": 90.5, "longitude": 0},
        headers=headers,
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_get_someone_elses_pin(client, register):
    _, alice = await register()
    _, bob = await register()
    pin = await _create_pin(client, alice)

    r = await client.get(f"/api/v1/pins/{pin['id']}", headers=bob)
    assert r.status_code == 200
    assert r.json()["name"] == pin["name"]


@pytest.mark.asyncio
async def test_get_missing_pin(client, register):
    _, headers = await register()
    r = await client.get(f"/api/v1/pins/{uuid.uuid4()}", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_update_pin(client, register):
    _, headers = await register()
    pin = await _create_pin(client, headers)
    r = await client.put(
        f"/api/v1/pins/{pin['id']}",
        json={"name": "Renamed", "latitude": 0, "longitude": 0},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Renamed"
    assert r.json()["latitude"] == 0


@pytest.mark.asyncio
async def test_update_by_non_owner(client, register):
    _, alice = await register()
    _, bob = await register()
    pin = await _create_pin(client, alice)
    r = await client.put(
        f"/api/v1/pins/{pin['id']}",
        json={"name": "Mine now", "latitude": 0, "longitude": 0},
        headers=bob,
    )
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_delete_pin_twice(client, register):
    _, headers = await register()
    pin = await _create_pin(client, headers)

    r = await client.delete(f"/api/v1/pins/{pin['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"deleted": True}

    r = await client.delete(f"/api/v1/pins/{pin['id']}", headers=headers)
    assert r.status_code == 404

    r = await client.get(f"/api/v1/pins/{pin['id']}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_bad_pin_id(client, register):
    _, headers = await register()
    r = await client.get("/api/v1/pins/not-a-uuid", headers=headers)
    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "INVALID_INPUT"
    assert error["message"].startswith("pin_id: ")
