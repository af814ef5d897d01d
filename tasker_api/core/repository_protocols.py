"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Records cross the boundary as plain dicts keyed by attribute name
    - Repositories never commit; the Store commits once per operation
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - One generic Repository contract for all four resources; the SQLAlchemy
      store and the in-memory test store both satisfy it
"""

from typing import Any, Protocol
from uuid import UUID

from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.domain_types import GeocodeResult


class Repository(Protocol):
    """Contract for one persistent collection — implemented by shell."""
    async def get(self, record_id: UUID) -> dict | None: ...
    async def find(self, **filters: Any) -> list[dict]: ...
    async def create(self, fields: dict) -> dict: ...
    async def update(self, record_id: UUID, fields: dict) -> dict | None: ...
    async def delete(self, record_id: UUID) -> bool: ...
    async def delete_where(self, **filters: Any) -> int: ...
    async def query(self, spec: QuerySpec) -> tuple[list[dict], int]: ...


class Store(Protocol):
    """All collections sharing one unit of work."""
    users: Repository
    profiles: Repository
    tasks: Repository
    payments: Repository

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class Geocoder(Protocol):
    """Contract for address resolution — implemented by shell."""
    async def geocode(self, address: str) -> list[GeocodeResult]: ...
