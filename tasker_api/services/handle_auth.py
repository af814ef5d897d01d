"""Auth Handlers — register, login, current user, token resolution.

Invariants:
    - Login failures never reveal whether the email exists
    - Tokens are signed with the configured secret/algorithm only
    - resolve_requester fails with AuthenticationError when the token subject
      no longer exists
"""

import logging
from uuid import UUID

from tasker_api.config import Settings
from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import Role
from tasker_api.core.errors import AuthenticationError
from tasker_api.core.repository_protocols import Store
from tasker_api.infrastructure.security import (
    build_access_token, decode_access_token, verify_password,
)
from tasker_api.schemas.user import LoginRequest, RegisterRequest, UserCreate, UserResponse
from tasker_api.services.handle_users import new_user_fields
from tasker_api.services.resource_helpers import envelope, serialize

logger = logging.getLogger(__name__)


class AuthHandlers:
    def __init__(self, store: Store, settings: Settings):
        self.store = store
        self.settings = settings

    def _token_response(self, user: dict) -> dict:
        token = build_access_token(
            user_id=user["id"],
            role=user["role"],
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expire_minutes=self.settings.jwt_expire_minutes,
        )
        return {"success": True, "token": token}

    async def register(self, payload: RegisterRequest) -> dict:
        user = await self.store.users.create(
            new_user_fields(UserCreate(**payload.model_dump())),
        )
        await self.store.commit()
        logger.info(f"User {user['id']} registered", extra={"resource_id": str(user["id"])})
        return self._token_response(user)

    async def login(self, payload: LoginRequest) -> dict:
        matches = await self.store.users.find(email=payload.email.strip().lower())
        user = matches[0] if matches else None
        if user is None or not verify_password(payload.password, user["password_hash"]):
            raise AuthenticationError("Invalid credentials")
        return self._token_response(user)

    async def me(self, requester: Requester) -> dict:
        user = await self.store.users.get(requester.id)
        if user is None:
            raise AuthenticationError()
        return envelope(serialize(UserResponse, user))

    async def resolve_requester(self, token: str) -> Requester:
        """Bearer token -> Requester (id + current stored role)."""
        claims = decode_access_token(
            token,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
        )
        try:
            user_id = UUID(str(claims.get("sub") or ""))
        except ValueError as e:
            raise AuthenticationError() from e
        user = await self.store.users.get(user_id)
        if user is None:
            raise AuthenticationError()
        return Requester(id=user["id"], role=Role(user["role"]))
