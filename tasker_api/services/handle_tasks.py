"""Task Handlers — add, list, get, update, delete tasks.

Invariants:
    - add_task requires an existing parent profile (ParentNotFoundError otherwise)
      and a requester who owns that profile or is Admin
    - user_id is always the requester; profile_id always the path parameter
    - get_task embeds the parent's {id, name, description} projection
"""

import logging
from uuid import UUID

from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester, ensure_authorized
from tasker_api.core.errors import ParentNotFoundError
from tasker_api.core.repository_protocols import Store
from tasker_api.schemas.profile import ProfileSummary
from tasker_api.schemas.task import TaskCreate, TaskFields, TaskResponse, TaskUpdate
from tasker_api.services.resource_helpers import (
    envelope, list_with_query, load_or_404, revalidate, serialize,
)

logger = logging.getLogger(__name__)


class TaskHandlers:
    """Task controller over an injected store."""

    def __init__(self, store: Store):
        self.store = store

    async def add_task(
        self, requester: Requester, profile_id: UUID, payload: TaskCreate,
    ) -> dict:
        profile = await self.store.profiles.get(profile_id)
        if profile is None:
            raise ParentNotFoundError("Profile", str(profile_id))
        ensure_authorized(
            requester, profile["user_id"],
            action="add a task to", resource_type="Profile", resource_id=profile_id,
        )

        record = await self.store.tasks.create({
            **payload.model_dump(),
            "profile_id": profile_id,
            "user_id": requester.id,
        })
        await self.store.commit()
        logger.info(
            f"Task {record['id']} added to profile {profile_id}",
            extra={"request_user": str(requester.id), "resource_id": str(record["id"])},
        )
        return envelope(serialize(TaskResponse, record))

    async def list_tasks(self, spec: QuerySpec) -> dict:
        return await list_with_query(self.store.tasks, spec, TaskResponse)

    async def list_profile_tasks(self, profile_id: UUID) -> dict:
        records = await self.store.tasks.find(profile_id=profile_id)
        data = [serialize(TaskResponse, r) for r in records]
        return envelope(data, count=len(data))

    async def get_task(self, task_id: UUID) -> dict:
        record = await load_or_404(self.store.tasks, task_id, "Task")
        profile = await self.store.profiles.get(record["profile_id"])
        data = serialize(TaskResponse, {
            **record,
            "profile": ProfileSummary.model_validate(profile) if profile else None,
        })
        return envelope(data)

    async def update_task(
        self, requester: Requester, task_id: UUID, payload: TaskUpdate,
    ) -> dict:
        current = await load_or_404(self.store.tasks, task_id, "Task")
        ensure_authorized(
            requester, current["user_id"],
            action="update", resource_type="Task", resource_id=task_id,
        )

        changes = revalidate(TaskFields, current, payload.model_dump(exclude_unset=True))
        record = await self.store.tasks.update(task_id, changes)
        await self.store.commit()
        return envelope(serialize(TaskResponse, record))

    async def delete_task(self, requester: Requester, task_id: UUID) -> dict:
        current = await load_or_404(self.store.tasks, task_id, "Task")
        ensure_authorized(
            requester, current["user_id"],
            action="delete", resource_type="Task", resource_id=task_id,
        )

        await self.store.tasks.delete(task_id)
        await self.store.commit()
        logger.info(
            f"Task {task_id} deleted",
            extra={"request_user": str(requester.id), "resource_id": str(task_id)},
        )
        return envelope({})
