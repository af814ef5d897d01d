"""Request Schemas — field constraints at the API boundary."""

import pytest
from pydantic import ValidationError

from tasker_api.schemas.payment import PAYMENT_QUERY_FIELDS, PaymentUpdate
from tasker_api.schemas.profile import ProfileCreate, ProfileUpdate
from tasker_api.schemas.task import TaskCreate
from tasker_api.schemas.user import RegisterRequest, UserCreate

VALID_PROFILE = {
    "name": "  Acme Movers  ",
    "description": "Moving and packing",
    "phone": "555-0100",
    "address": "233 Bay State Rd Boston MA",
}


def test_profile_name_is_stripped():
    assert ProfileCreate(**VALID_PROFILE).name == "Acme Movers"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"name": "x" * 51},
        {"description": "d" * 501},
        {"phone": "5" * 21},
        {"email": "not-an-email"},
        {"address": ""},
    ],
)
def test_profile_create_rejects(overrides):
    with pytest.raises(ValidationError):
        ProfileCreate(**{**VALID_PROFILE, **overrides})


def test_profile_create_requires_address():
    body = {k: v for k, v in VALID_PROFILE.items() if k != "address"}
    with pytest.raises(ValidationError):
        ProfileCreate(**body)


def test_profile_update_is_partial():
    update = ProfileUpdate(phone="555-0199")
    assert update.model_dump(exclude_unset=True) == {"phone": "555-0199"}


def test_task_budget_cannot_be_negative():
    with pytest.raises(ValidationError):
        TaskCreate(title="Move", description="d", budget=-1)


def test_task_title_is_stripped():
    assert TaskCreate(title="  Move  ", description="d").title == "Move"


def test_register_cannot_claim_admin():
    with pytest.raises(ValidationError):
        RegisterRequest(name="Eve", email="eve@example.com", password="secret1", role="Admin")


def test_user_email_is_lowercased():
    user = UserCreate(name="Sam", email=" Sam@Example.COM ", password="secret1")
    assert user.email == "sam@example.com"


def test_payment_status_must_be_known():
    with pytest.raises(ValidationError):
        PaymentUpdate(status="Refunded")


def test_payment_status_filter_converter():
    assert PAYMENT_QUERY_FIELDS["status"]("Paid") == "Paid"
    with pytest.raises(ValueError):
        PAYMENT_QUERY_FIELDS["status"]("Refunded")
