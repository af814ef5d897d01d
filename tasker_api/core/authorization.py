"""Authorization Gate — owner-or-admin check shared by every resource controller.

Invariants:
    - is_authorized is pure: no IO, no side effects
    - is_authorized(r, role, owner) is True iff r == owner or role == Admin
    - ensure_authorized raises BEFORE any mutation; callers never roll back
    - Role checks for routes (require_roles) live in the API layer, not here

Design Decisions:
    - Ids compared as strings: UUIDs from the DB and from JWT subjects compare equal
"""

from dataclasses import dataclass
from uuid import UUID

from tasker_api.core.domain_types import Role
from tasker_api.core.errors import ForbiddenError


@dataclass(frozen=True)
class Requester:
    """Authenticated caller of a controller operation."""
    id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return Role(self.role) is Role.ADMIN


def is_authorized(
    requester_id: UUID | str, requester_role: Role | str,
    resource_owner_id: UUID | str | None,
) -> bool:
    """True when the requester owns the resource or is an Admin."""
    if Role(requester_role) is Role.ADMIN:
        return True
    if resource_owner_id is None:
        return False
    return str(requester_id) == str(resource_owner_id)


def ensure_authorized(
    requester: Requester,
    resource_owner_id: UUID | str | None,
    *,
    action: str,
    resource_type: str,
    resource_id: UUID | str,
) -> None:
    """Raise ForbiddenError unless the requester may mutate the resource."""
    if not is_authorized(requester.id, requester.role, resource_owner_id):
        raise ForbiddenError(
            str(requester.id), action, resource_type, str(resource_id),
        )
