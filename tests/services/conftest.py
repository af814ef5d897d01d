"""Service test fixtures — in-memory store, fake geocoder and requesters.

Invariants:
    - Every test gets a fresh InMemoryStore (no database, no network)
    - Requesters: owner (Tasker), stranger (User), admin (Admin)
    - Seed helpers commit, so rollback() in a test never undoes the setup

Design Decisions:
    - Handlers are exercised directly; routing and auth are covered in tests/api
"""

import uuid

import pytest

from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import Role
from tasker_api.services.handle_payments import PaymentHandlers
from tasker_api.services.handle_profiles import ProfileHandlers
from tasker_api.services.handle_tasks import TaskHandlers
from tests.services.factories import profile_payload, task_payload
from tests.services.memory_store import FakeGeocoder, InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def owner():
    return Requester(id=uuid.uuid4(), role=Role.TASKER)


@pytest.fixture
def stranger():
    return Requester(id=uuid.uuid4(), role=Role.USER)


@pytest.fixture
def admin():
    return Requester(id=uuid.uuid4(), role=Role.ADMIN)


@pytest.fixture
def profile_handlers(store, geocoder):
    return ProfileHandlers(store, geocoder)


@pytest.fixture
def task_handlers(store):
    return TaskHandlers(store)


@pytest.fixture
def payment_handlers(store):
    return PaymentHandlers(store)


@pytest.fixture
def seed_profile(profile_handlers):
    """Create a profile through the handler; returns its data dict."""
    async def _seed(requester, name: str = "Acme Movers", **overrides) -> dict:
        body = await profile_handlers.create_profile(
            requester, profile_payload(name, **overrides),
        )
        return body["data"]
    return _seed


@pytest.fixture
def seed_task(task_handlers):
    async def _seed(requester, profile_id, title: str = "Move a sofa", **overrides) -> dict:
        body = await task_handlers.add_task(
            requester, uuid.UUID(str(profile_id)), task_payload(title, **overrides),
        )
        return body["data"]
    return _seed
