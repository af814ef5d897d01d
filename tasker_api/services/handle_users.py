"""User Handlers — admin account management.

Invariants:
    - Passwords are hashed before reaching the store; password_hash never leaves it
    - Updates re-validate the merged record (email pattern, role enum)
    - Route-level role checks restrict every operation here to Admin
"""

import logging
from uuid import UUID

from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.domain_types import Role
from tasker_api.core.repository_protocols import Store
from tasker_api.infrastructure.security import hash_password
from tasker_api.schemas.user import UserCreate, UserFields, UserResponse, UserUpdate
from tasker_api.services.resource_helpers import (
    envelope, list_with_query, load_or_404, revalidate, serialize,
)

logger = logging.getLogger(__name__)


def new_user_fields(payload: UserCreate) -> dict:
    """Store-ready fields for a new account."""
    return {
        "name": payload.name,
        "email": payload.email,
        "role": Role(payload.role).value,
        "password_hash": hash_password(payload.password),
    }


class UserHandlers:
    def __init__(self, store: Store):
        self.store = store

    async def list_users(self, spec: QuerySpec) -> dict:
        return await list_with_query(self.store.users, spec, UserResponse)

    async def get_user(self, user_id: UUID) -> dict:
        record = await load_or_404(self.store.users, user_id, "User")
        return envelope(serialize(UserResponse, record))

    async def create_user(self, payload: UserCreate) -> dict:
        record = await self.store.users.create(new_user_fields(payload))
        await self.store.commit()
        logger.info(f"User {record['id']} created", extra={"resource_id": str(record["id"])})
        return envelope(serialize(UserResponse, record))

    async def update_user(self, user_id: UUID, payload: UserUpdate) -> dict:
        current = await load_or_404(self.store.users, user_id, "User")
        changes = payload.model_dump(exclude_unset=True)
        password = changes.pop("password", None)
        changes = revalidate(UserFields, current, changes)
        if "role" in changes:
            changes["role"] = Role(changes["role"]).value
        if password:
            changes["password_hash"] = hash_password(password)

        record = await self.store.users.update(user_id, changes)
        await self.store.commit()
        return envelope(serialize(UserResponse, record))

    async def delete_user(self, user_id: UUID) -> dict:
        await load_or_404(self.store.users, user_id, "User")
        await self.store.users.delete(user_id)
        await self.store.commit()
        logger.info(f"User {user_id} deleted", extra={"resource_id": str(user_id)})
        return envelope({})
