"""Task Schemas — request/response models for tasks.

Invariants:
    - title: 1-100 chars stripped; description: 1-1000 chars; budget >= 0
    - profile_id / user_id are never accepted from the body (taken from path + requester)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from tasker_api.schemas.profile import ProfileSummary


class TaskFields(BaseModel):
    """Persisted, constrained task fields."""
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    budget: float | None = Field(None, ge=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please add a task title")
        return v


class TaskCreate(TaskFields):
    pass


class TaskUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=1000)
    budget: float | None = Field(None, ge=0)


class TaskResponse(BaseModel):
    id: UUID
    title: str
    description: str
    budget: float | None = None
    profile_id: UUID
    user_id: UUID
    created_at: datetime
    profile: ProfileSummary | None = None


TASK_QUERY_FIELDS = {
    "title": str,
    "description": str,
    "budget": float,
    "profile_id": UUID,
    "user_id": UUID,
    "created_at": datetime.fromisoformat,
}
