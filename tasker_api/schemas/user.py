"""User & Auth Schemas — account management and login payloads.

Invariants:
    - email is stripped and lowercased before it reaches the store
    - password: 6-128 chars, only ever accepted, never returned
    - RegisterRequest cannot ask for the Admin role
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from tasker_api.core.domain_types import SELF_ASSIGNABLE_ROLES, Role
from tasker_api.schemas.profile import EMAIL_PATTERN


def _normalize_email(v: str | None) -> str | None:
    return v.strip().lower() if v is not None else v


class UserFields(BaseModel):
    """Persisted, constrained user fields (re-validated on update)."""
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    role: Role = Role.USER

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v


class UserCreate(UserFields):
    password: str = Field(min_length=6, max_length=128)


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=320)
    role: Role | None = None
    password: str | None = Field(None, min_length=6, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    role: Role
    created_at: datetime


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    password: str = Field(min_length=6, max_length=128)
    role: Role = Role.USER

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v

    @field_validator("role")
    @classmethod
    def self_assignable(cls, v: Role) -> Role:
        if v not in SELF_ASSIGNABLE_ROLES:
            raise ValueError(f"Role {v.value} cannot be self-assigned")
        return v


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=128)


def _role(value: str) -> str:
    return Role(value).value


USER_QUERY_FIELDS = {
    "name": str,
    "email": str,
    "role": _role,
    "created_at": datetime.fromisoformat,
}
