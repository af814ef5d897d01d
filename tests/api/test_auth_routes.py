"""Auth & User Routes — registration, login, current user and admin account management."""

import uuid


async def test_register_login_me(client, register):
    headers = await register("Alice", role="Tasker")
    resp = await client.get("/api/v2/auth/me", headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["email"] == "alice@example.com"
    assert data["role"] == "Tasker"
    assert "password_hash" not in data

    resp = await client.post("/api/v2/auth/login", json={
        "email": "alice@example.com", "password": "secret1",
    })
    assert resp.status_code == 200
    assert resp.json()["success"] is True


async def test_login_with_wrong_password(client, register):
    await register("Alice")
    resp = await client.post("/api/v2/auth/login", json={
        "email": "alice@example.com", "password": "wrong-pass",
    })
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Invalid credentials"}


async def test_cannot_self_register_as_admin(client):
    resp = await client.post("/api/v2/auth/register", json={
        "name": "Eve", "email": "eve@example.com", "password": "secret1", "role": "Admin",
    })
    assert resp.status_code == 400


async def test_duplicate_email_registration(client, register):
    await register("Alice")
    resp = await client.post("/api/v2/auth/register", json={
        "name": "Alice", "email": "ALICE@example.com", "password": "secret1",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "Duplicate field value entered for 'email'"


async def test_me_without_token(client):
    resp = await client.get("/api/v2/auth/me")
    assert resp.status_code == 401


async def test_users_routes_are_admin_only(client, register):
    headers = await register("Alice", role="Tasker")
    resp = await client.get("/api/v2/users", headers=headers)
    assert resp.status_code == 403


async def test_admin_manages_users(client, admin_headers):
    resp = await client.post("/api/v2/users", json={
        "name": "Carol", "email": "carol@example.com", "password": "secret1", "role": "Tasker",
    }, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    user_id = resp.json()["data"]["id"]

    resp = await client.get("/api/v2/users", params={"role": "Tasker"}, headers=admin_headers)
    assert [u["id"] for u in resp.json()["data"]] == [user_id]

    resp = await client.put(f"/api/v2/users/{user_id}", json={"role": "User"}, headers=admin_headers)
    assert resp.json()["data"]["role"] == "User"

    resp = await client.delete(f"/api/v2/users/{user_id}", headers=admin_headers)
    assert resp.json() == {"success": True, "data": {}}

    resp = await client.get(f"/api/v2/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 404


async def test_unknown_user_is_404(client, admin_headers):
    resp = await client.get(f"/api/v2/users/{uuid.uuid4()}", headers=admin_headers)
    assert resp.status_code == 404
