"""Payment Schemas — request/response models for payments.

Invariants:
    - reference_id and access_code are required on create
    - status is never set on create (always Init); updates go through the
      transition check in core.enforce_payment
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tasker_api.core.domain_types import PaymentStatus


class PaymentFields(BaseModel):
    reference_id: str = Field(min_length=1, max_length=100)
    access_code: str = Field(min_length=1, max_length=100)
    amount: float | None = Field(None, ge=0)


class PaymentCreate(PaymentFields):
    pass


class PaymentUpdate(BaseModel):
    reference_id: str | None = Field(None, min_length=1, max_length=100)
    access_code: str | None = Field(None, min_length=1, max_length=100)
    amount: float | None = Field(None, ge=0)
    status: PaymentStatus | None = None


class PaymentResponse(BaseModel):
    id: UUID
    user_id: UUID
    task_id: UUID
    task_owner_id: UUID
    reference_id: str
    access_code: str
    amount: float | None = None
    status: PaymentStatus
    paid_at: datetime | None = None
    created_at: datetime


def _status(value: str) -> str:
    return PaymentStatus(value).value


PAYMENT_QUERY_FIELDS = {
    "user_id": UUID,
    "task_id": UUID,
    "task_owner_id": UUID,
    "reference_id": str,
    "amount": float,
    "status": _status,
    "paid_at": datetime.fromisoformat,
    "created_at": datetime.fromisoformat,
}
