"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProfileId, TaskId, PaymentId wrap UUIDs
    - Role and PaymentStatus values are the exact strings stored and serialized
    - GeocodeResult is immutable; index 0 of a geocoder answer is the one consumed

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProfileId = NewType("ProfileId", UUID)
TaskId = NewType("TaskId", UUID)
PaymentId = NewType("PaymentId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles. Admin bypasses ownership checks."""
    TASKER = "Tasker"
    USER = "User"
    ADMIN = "Admin"


class PaymentStatus(str, Enum):
    """Payment lifecycle: Init -> Paid | Cancelled."""
    INIT = "Init"
    PAID = "Paid"
    CANCELLED = "Cancelled"


# Roles allowed on the mutating profile/task/payment routes
MEMBER_ROLES = (Role.TASKER, Role.USER, Role.ADMIN)

# Roles a user may pick when registering
SELF_ASSIGNABLE_ROLES = (Role.TASKER, Role.USER)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class GeocodeResult:
    """One candidate returned by a geocoder."""
    longitude: float
    latitude: float
    formatted_address: str | None = None
    street_name: str | None = None
    city: str | None = None
    state_code: str | None = None
    zipcode: str | None = None
    country_code: str | None = None
