"""Route test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DatabaseSessionManager, so
      rollback-on-error behaves exactly as in production
    - db_manager patched for the readiness probe, which bypasses get_db
    - get_geocoder overridden with FakeGeocoder: no network in route tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
    - Admins cannot self-register; admin_token inserts the account directly
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from tasker_api.api.dependencies import get_geocoder
from tasker_api.db.base import Base
from tasker_api.infrastructure.database import get_db, DatabaseSessionManager
from tasker_api.infrastructure.security import hash_password
from tasker_api.main import app
from tasker_api.models import User
import tasker_api.infrastructure.database as db_module
from tests.services.memory_store import FakeGeocoder


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
async def client(test_engine, test_session_factory, geocoder):
    """FastAPI test client with DB and geocoder dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register an account through the API; returns its bearer headers."""
    async def _register(name: str, role: str = "User", password: str = "secret1") -> dict:
        resp = await client.post("/api/v2/auth/register", json={
            "name": name,
            "email": f"{name.lower()}@example.com",
            "password": password,
            "role": role,
        })
        assert resp.status_code == 201, resp.text
        return bearer(resp.json()["token"])
    return _register


@pytest.fixture
async def admin_headers(client, test_session_factory):
    async with test_session_factory() as session:
        session.add(User(
            name="Root",
            email="root@example.com",
            role="Admin",
            password_hash=hash_password("rootpass"),
        ))
        await session.commit()
    resp = await client.post("/api/v2/auth/login", json={
        "email": "root@example.com", "password": "rootpass",
    })
    assert resp.status_code == 200, resp.text
    return bearer(resp.json()["token"])

