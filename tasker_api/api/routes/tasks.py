"""Task Routes — /api/v2/tasks and /api/v2/profiles/{profile_id}/tasks."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasker_api.api.dependencies import get_task_handlers, query_spec, require_roles
from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import MEMBER_ROLES
from tasker_api.schemas.task import TASK_QUERY_FIELDS, TaskCreate, TaskResponse, TaskUpdate
from tasker_api.services.handle_tasks import TaskHandlers

router = APIRouter(prefix="/api/v2", tags=["tasks"])

member = require_roles(*MEMBER_ROLES)


@router.get("/tasks")
async def list_tasks(
    spec: QuerySpec = Depends(query_spec(TASK_QUERY_FIELDS, TaskResponse.model_fields)),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    return await handlers.list_tasks(spec)


@router.get("/profiles/{profile_id}/tasks")
async def list_profile_tasks(
    profile_id: UUID, handlers: TaskHandlers = Depends(get_task_handlers),
):
    return await handlers.list_profile_tasks(profile_id)


@router.post("/profiles/{profile_id}/tasks", status_code=status.HTTP_201_CREATED)
async def add_task(
    profile_id: UUID,
    body: TaskCreate,
    requester: Requester = Depends(member),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    return await handlers.add_task(requester, profile_id, body)


@router.get("/tasks/{task_id}")
async def get_task(task_id: UUID, handlers: TaskHandlers = Depends(get_task_handlers)):
    return await handlers.get_task(task_id)


@router.put("/tasks/{task_id}")
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    requester: Requester = Depends(member),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    return await handlers.update_task(requester, task_id, body)


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: UUID,
    requester: Requester = Depends(member),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    return await handlers.delete_task(requester, task_id)
