"""Health Routes & Error Handlers — probes and the catch-all 500 envelope."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tasker_api.api.error_handlers import register_error_handlers


async def test_liveness(client):
    resp = await client.get("/api/v2/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    resp = await client.get("/api/v2/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"database": "healthy"}}


async def test_unhandled_exception_is_generic_500():
    bare = FastAPI()
    register_error_handlers(bare)

    @bare.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    async with AsyncClient(
        transport=ASGITransport(app=bare, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        resp = await c.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Server Error"}
