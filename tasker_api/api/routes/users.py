"""User Routes — /api/v2/users (Admin only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasker_api.api.dependencies import get_user_handlers, query_spec, require_roles
from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.domain_types import Role
from tasker_api.schemas.user import USER_QUERY_FIELDS, UserCreate, UserResponse, UserUpdate
from tasker_api.services.handle_users import UserHandlers

router = APIRouter(
    prefix="/api/v2/users", tags=["users"],
    dependencies=[Depends(require_roles(Role.ADMIN))],
)


@router.get("")
async def list_users(
    spec: QuerySpec = Depends(query_spec(USER_QUERY_FIELDS, UserResponse.model_fields)),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    return await handlers.list_users(spec)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, handlers: UserHandlers = Depends(get_user_handlers)):
    return await handlers.create_user(body)


@router.get("/{user_id}")
async def get_user(user_id: UUID, handlers: UserHandlers = Depends(get_user_handlers)):
    return await handlers.get_user(user_id)


@router.put("/{user_id}")
async def update_user(
    user_id: UUID, body: UserUpdate, handlers: UserHandlers = Depends(get_user_handlers),
):
    return await handlers.update_user(user_id, body)


@router.delete("/{user_id}")
async def delete_user(user_id: UUID, handlers: UserHandlers = Depends(get_user_handlers)):
    return await handlers.delete_user(user_id)
