"""Request payload builders shared by handler and route tests."""

from tasker_api.schemas.payment import PaymentCreate
from tasker_api.schemas.profile import ProfileCreate
from tasker_api.schemas.task import TaskCreate


def profile_payload(name: str = "Acme Movers", **overrides) -> ProfileCreate:
    return ProfileCreate(**{
        "name": name,
        "description": "Moving and packing",
        "phone": "555-0100",
        "address": "233 Bay State Rd Boston MA 02215",
        **overrides,
    })


def task_payload(title: str = "Move a sofa", **overrides) -> TaskCreate:
    return TaskCreate(**{
        "title": title,
        "description": "Third floor, no elevator",
        "budget": 120.0,
        **overrides,
    })


def payment_payload(**overrides) -> PaymentCreate:
    return PaymentCreate(**{
        "reference_id": "ref-0001",
        "access_code": "acc-0001",
        "amount": 120.0,
        **overrides,
    })


PROFILE_BODY = profile_payload().model_dump()

TASK_BODY = task_payload().model_dump()

PAYMENT_BODY = payment_payload().model_dump()
