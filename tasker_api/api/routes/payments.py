"""Payment Routes — /api/v2/payments and /api/v2/tasks/{task_id}/payments.

Invariants:
    - Every payment route requires an authenticated member
    - Listing all payments is Admin only
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasker_api.api.dependencies import get_payment_handlers, query_spec, require_roles
from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester
from tasker_api.core.domain_types import MEMBER_ROLES, Role
from tasker_api.schemas.payment import (
    PAYMENT_QUERY_FIELDS, PaymentCreate, PaymentResponse, PaymentUpdate,
)
from tasker_api.services.handle_payments import PaymentHandlers

router = APIRouter(prefix="/api/v2", tags=["payments"])

member = require_roles(*MEMBER_ROLES)
admin = require_roles(Role.ADMIN)


@router.get("/payments", dependencies=[Depends(admin)])
async def list_payments(
    spec: QuerySpec = Depends(query_spec(PAYMENT_QUERY_FIELDS, PaymentResponse.model_fields)),
    handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.list_payments(spec)


@router.get("/tasks/{task_id}/payments", dependencies=[Depends(member)])
async def list_task_payments(
    task_id: UUID, handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.list_task_payments(task_id)


@router.post("/tasks/{task_id}/payments", status_code=status.HTTP_201_CREATED)
async def create_payment(
    task_id: UUID,
    body: PaymentCreate,
    requester: Requester = Depends(member),
    handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.create_payment(requester, task_id, body)


@router.get("/payments/{payment_id}", dependencies=[Depends(member)])
async def get_payment(
    payment_id: UUID, handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.get_payment(payment_id)


@router.put("/payments/{payment_id}")
async def update_payment(
    payment_id: UUID,
    body: PaymentUpdate,
    requester: Requester = Depends(member),
    handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.update_payment(requester, payment_id, body)


@router.delete("/payments/{payment_id}")
async def delete_payment(
    payment_id: UUID,
    requester: Requester = Depends(member),
    handlers: PaymentHandlers = Depends(get_payment_handlers),
):
    return await handlers.delete_payment(requester, payment_id)
