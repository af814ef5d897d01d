"""Profile Routes — HTTP contract, ownership and the cascade scenario end to end."""

from tests.services.factories import PROFILE_BODY, TASK_BODY


async def _create_profile(client, headers, **overrides) -> dict:
    resp = await client.post("/api/v2/profiles", json={**PROFILE_BODY, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_cascade_delete_scenario(client, register, admin_headers):
    tasker = await register("Alice", role="Tasker")
    user = await register("Bob", role="User")

    profile = await _create_profile(client, tasker, name="Acme Movers!!")
    assert profile["slug"] == "acme-movers"
    assert profile["location"]["type"] == "Point"
    for title in ("Sofa", "Piano"):
        resp = await client.post(
            f"/api/v2/profiles/{profile['id']}/tasks",
            json={**TASK_BODY, "title": title}, headers=tasker,
        )
        assert resp.status_code == 201, resp.text

    resp = await client.delete(f"/api/v2/profiles/{profile['id']}", headers=user)
    assert resp.status_code == 401
    assert resp.json()["success"] is False
    assert (await client.get(f"/api/v2/profiles/{profile['id']}/tasks")).json()["count"] == 2

    resp = await client.delete(f"/api/v2/profiles/{profile['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {}}

    resp = await client.get(f"/api/v2/profiles/{profile['id']}/tasks")
    assert resp.json() == {"success": True, "count": 0, "data": []}
    resp = await client.get(f"/api/v2/profiles/{profile['id']}")
    assert resp.status_code == 404
    assert resp.json() == {
        "success": False, "error": f"No profile with id of {profile['id']}",
    }


async def test_create_requires_authentication(client):
    resp = await client.post("/api/v2/profiles", json=PROFILE_BODY)
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Not authorized to access this route"}


async def test_create_with_invalid_token(client):
    resp = await client.post(
        "/api/v2/profiles", json=PROFILE_BODY,
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 401


async def test_create_validation_error_is_400(client, register):
    tasker = await register("Alice", role="Tasker")
    body = {k: v for k, v in PROFILE_BODY.items() if k != "address"}
    resp = await client.post("/api/v2/profiles", json=body, headers=tasker)
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert "address" in resp.json()["error"]


async def test_duplicate_name_is_400(client, register):
    tasker = await register("Alice", role="Tasker")
    await _create_profile(client, tasker)
    resp = await client.post("/api/v2/profiles", json=PROFILE_BODY, headers=tasker)
    assert resp.status_code == 400
    assert resp.json() == {
        "success": False, "error": "Duplicate field value entered for 'name'",
    }


async def test_geocoder_failure_is_400_and_persists_nothing(client, register, geocoder):
    tasker = await register("Alice", role="Tasker")
    geocoder.results = []
    resp = await client.post("/api/v2/profiles", json=PROFILE_BODY, headers=tasker)
    assert resp.status_code == 400
    assert (await client.get("/api/v2/profiles")).json()["count"] == 0


async def test_list_is_public_with_advanced_query(client, register):
    tasker = await register("Alice", role="Tasker")
    for name in ("Alpha", "Bravo", "Charlie"):
        await _create_profile(client, tasker, name=name)

    resp = await client.get("/api/v2/profiles", params={
        "select": "name,slug", "sort": "name", "limit": "2",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["pagination"] == {"next": {"page": 2, "limit": 2}}
    assert [p["name"] for p in body["data"]] == ["Alpha", "Bravo"]
    assert set(body["data"][0]) == {"id", "name", "slug"}


async def test_list_rejects_unknown_filter(client):
    resp = await client.get("/api/v2/profiles", params={"account_number": "123"})
    assert resp.status_code == 400


async def test_update_by_owner(client, register):
    tasker = await register("Alice", role="Tasker")
    profile = await _create_profile(client, tasker)
    resp = await client.put(
        f"/api/v2/profiles/{profile['id']}", json={"name": "Acme Deluxe"}, headers=tasker,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["slug"] == "acme-deluxe"


async def test_update_by_other_user_is_401(client, register):
    tasker = await register("Alice", role="Tasker")
    user = await register("Bob", role="User")
    profile = await _create_profile(client, tasker)
    resp = await client.put(
        f"/api/v2/profiles/{profile['id']}", json={"name": "Hijacked"}, headers=user,
    )
    assert resp.status_code == 401
    assert (await client.get(f"/api/v2/profiles/{profile['id']}")).json()["data"]["name"] == "Acme Movers"


async def test_malformed_id_is_400(client):
    resp = await client.get("/api/v2/profiles/not-a-uuid")
    assert resp.status_code == 400
    assert resp.json()["success"] is False
