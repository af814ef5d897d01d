"""Domain Types — verifies identity types, role/status enums and geocode results.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
    - Self-registration never offers Admin
"""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from tasker_api.core.domain_types import (
    MEMBER_ROLES, SELF_ASSIGNABLE_ROLES, GeocodeResult, PaymentId, PaymentStatus,
    ProfileId, Role, TaskId, UserId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert ProfileId(uid) == uid
    assert TaskId(uid) == uid
    assert PaymentId(uid) == uid


def test_role_values():
    assert [r.value for r in Role] == ["Tasker", "User", "Admin"]
    assert Role("Admin") is Role.ADMIN
    assert Role.USER == "User"


def test_payment_status_values():
    assert [s.value for s in PaymentStatus] == ["Init", "Paid", "Cancelled"]


def test_member_and_self_assignable_roles():
    assert set(MEMBER_ROLES) == set(Role)
    assert Role.ADMIN not in SELF_ASSIGNABLE_ROLES


def test_geocode_result_is_immutable():
    result = GeocodeResult(longitude=1.0, latitude=2.0)
    assert result.city is None
    with pytest.raises(FrozenInstanceError):
        result.city = "Boston"
