"""User ORM — identity, role and credentials.

Invariants:
    - email is unique and stored lowercase
    - role is one of Tasker, User, Admin (default User)
    - password_hash is never serialized by any response schema
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from tasker_api.core.domain_types import Role
from tasker_api.db.base import Base


class User(Base):
    """User account — owner of profiles, tasks and payments."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    role: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Role.USER.value,
    )
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
