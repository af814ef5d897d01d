"""Profile Routes — /api/v2/profiles.

Invariants:
    - GET routes are public
    - POST/PUT/DELETE require an authenticated Tasker, User or Admin
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasker_api.api.dependencies import (
    get_profile_handlers, query_spec, require_roles,
)
from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import MEMBER_ROLES
from tasker_api.schemas.profile import (
    PROFILE_QUERY_FIELDS, ProfileCreate, ProfileResponse, ProfileUpdate,
)
from tasker_api.services.handle_profiles import ProfileHandlers

router = APIRouter(prefix="/api/v2/profiles", tags=["profiles"])

member = require_roles(*MEMBER_ROLES)


@router.get("")
async def list_profiles(
    spec: QuerySpec = Depends(query_spec(PROFILE_QUERY_FIELDS, ProfileResponse.model_fields)),
    handlers: ProfileHandlers = Depends(get_profile_handlers),
):
    return await handlers.list_profiles(spec)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: ProfileCreate,
    requester: Requester = Depends(member),
    handlers: ProfileHandlers = Depends(get_profile_handlers),
):
    return await handlers.create_profile(requester, body)


@router.get("/{profile_id}")
async def get_profile(
    profile_id: UUID, handlers: ProfileHandlers = Depends(get_profile_handlers),
):
    return await handlers.get_profile(profile_id)


@router.put("/{profile_id}")
async def update_profile(
    profile_id: UUID,
    body: ProfileUpdate,
    requester: Requester = Depends(member),
    handlers: ProfileHandlers = Depends(get_profile_handlers),
):
    return await handlers.update_profile(requester, profile_id, body)


@router.delete("/{profile_id}")
async def delete_profile(
    profile_id: UUID,
    requester: Requester = Depends(member),
    handlers: ProfileHandlers = Depends(get_profile_handlers),
):
    return await handlers.delete_profile(requester, profile_id)
