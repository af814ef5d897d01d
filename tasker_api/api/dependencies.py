"""API Dependencies — store, collaborators, authentication and role checks.

Invariants:
    - One SqlAlchemyStore per request (FastAPI caches get_store per request),
      so every repository in a handler shares the same unit of work
    - Collaborators (store, geocoder) are injected here and nowhere else;
      tests replace them through app.dependency_overrides
    - Missing/invalid credentials -> AuthenticationError (401);
      authenticated but wrong role -> RoleNotAllowedError (403)
"""

from typing import Any, Callable, Iterable, Mapping

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasker_api.config import Settings, get_settings
from tasker_api.core.advanced_query import QuerySpec, parse_query
from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import Role
from tasker_api.core.errors import AuthenticationError, RoleNotAllowedError
from tasker_api.core.repository_protocols import Geocoder, Store
from tasker_api.infrastructure.database import get_db
from tasker_api.infrastructure.geocoder import HttpGeocoder
from tasker_api.infrastructure.sql_store import SqlAlchemyStore
from tasker_api.services.handle_auth import AuthHandlers
from tasker_api.services.handle_payments import PaymentHandlers
from tasker_api.services.handle_profiles import ProfileHandlers
from tasker_api.services.handle_tasks import TaskHandlers
from tasker_api.services.handle_users import UserHandlers


# ─── Collaborators ──────────────────────────────────────────────

async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    return SqlAlchemyStore(db)


def get_geocoder(settings: Settings = Depends(get_settings)) -> Geocoder:
    return HttpGeocoder(
        settings.geocoder_provider_url,
        settings.geocoder_api_key,
        timeout_s=settings.geocoder_timeout_seconds,
    )


def get_auth_handlers(
    store: Store = Depends(get_store), settings: Settings = Depends(get_settings),
) -> AuthHandlers:
    return AuthHandlers(store, settings)


def get_profile_handlers(
    store: Store = Depends(get_store), geocoder: Geocoder = Depends(get_geocoder),
) -> ProfileHandlers:
    return ProfileHandlers(store, geocoder)


def get_task_handlers(store: Store = Depends(get_store)) -> TaskHandlers:
    return TaskHandlers(store)


def get_payment_handlers(store: Store = Depends(get_store)) -> PaymentHandlers:
    return PaymentHandlers(store)


def get_user_handlers(store: Store = Depends(get_store)) -> UserHandlers:
    return UserHandlers(store)


# ─── Authentication ─────────────────────────────────────────────

def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthenticationError()
    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthenticationError()
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(
    token: str = Depends(get_bearer_token),
    auth: AuthHandlers = Depends(get_auth_handlers),
) -> Requester:
    return await auth.resolve_requester(token)


def require_roles(*roles: Role) -> Callable[..., Any]:
    """Dependency factory: authenticated requester whose role is in roles."""
    allowed = frozenset(Role(r) for r in roles)

    async def _check(requester: Requester = Depends(get_current_user)) -> Requester:
        if Role(requester.role) not in allowed:
            raise RoleNotAllowedError(Role(requester.role).value)
        return requester

    return _check


# ─── Advanced query ─────────────────────────────────────────────

def query_spec(
    fields: Mapping[str, Callable[[str], Any]], selectable: Iterable[str],
) -> Callable[..., QuerySpec]:
    """Dependency factory: parse ?select/sort/page/limit/filters for a resource."""
    selectable = tuple(selectable)

    def _parse(request: Request, settings: Settings = Depends(get_settings)) -> QuerySpec:
        return parse_query(
            dict(request.query_params),
            fields,
            selectable=selectable,
            default_limit=settings.advanced_query_default_limit,
            max_limit=settings.advanced_query_max_limit,
        )

    return _parse
