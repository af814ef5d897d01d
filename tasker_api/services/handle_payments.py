"""Payment Handlers — create, list, get, update, delete payments.

Invariants:
    - A payment is created against an existing task; payer = requester,
      task_owner = the task's creator, status = Init
    - Status changes go through check_status_transition before any write
    - paid_at is stamped when status enters Paid
    - Update/delete are gated on the payer
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester, ensure_authorized
from tasker_api.core.domain_types import PaymentStatus
from tasker_api.core.enforce_payment import check_status_transition, enters_paid
from tasker_api.core.errors import ParentNotFoundError
from tasker_api.core.repository_protocols import Store
from tasker_api.schemas.payment import (
    PaymentCreate, PaymentFields, PaymentResponse, PaymentUpdate,
)
from tasker_api.services.resource_helpers import (
    envelope, list_with_query, load_or_404, revalidate, serialize,
)

logger = logging.getLogger(__name__)


class PaymentHandlers:
    """Payment controller over an injected store."""

    def __init__(self, store: Store):
        self.store = store

    async def create_payment(
        self, requester: Requester, task_id: UUID, payload: PaymentCreate,
    ) -> dict:
        task = await self.store.tasks.get(task_id)
        if task is None:
            raise ParentNotFoundError("Task", str(task_id))

        record = await self.store.payments.create({
            **payload.model_dump(),
            "user_id": requester.id,
            "task_id": task_id,
            "task_owner_id": task["user_id"],
            "status": PaymentStatus.INIT.value,
        })
        await self.store.commit()
        logger.info(
            f"Payment {record['id']} initialized for task {task_id}",
            extra={"request_user": str(requester.id), "resource_id": str(record["id"])},
        )
        return envelope(serialize(PaymentResponse, record))

    async def list_payments(self, spec: QuerySpec) -> dict:
        return await list_with_query(self.store.payments, spec, PaymentResponse)

    async def list_task_payments(self, task_id: UUID) -> dict:
        records = await self.store.payments.find(task_id=task_id)
        data = [serialize(PaymentResponse, r) for r in records]
        return envelope(data, count=len(data))

    async def get_payment(self, payment_id: UUID) -> dict:
        record = await load_or_404(self.store.payments, payment_id, "Payment")
        return envelope(serialize(PaymentResponse, record))

    async def update_payment(
        self, requester: Requester, payment_id: UUID, payload: PaymentUpdate,
    ) -> dict:
        current = await load_or_404(self.store.payments, payment_id, "Payment")
        ensure_authorized(
            requester, current["user_id"],
            action="update", resource_type="Payment", resource_id=payment_id,
        )

        changes = payload.model_dump(exclude_unset=True)
        status = changes.pop("status", None)
        changes = revalidate(PaymentFields, current, changes)
        if status is not None:
            check_status_transition(current["status"], status)
            if enters_paid(current["status"], status):
                changes["paid_at"] = datetime.now(timezone.utc)
            changes["status"] = PaymentStatus(status).value

        record = await self.store.payments.update(payment_id, changes)
        await self.store.commit()
        return envelope(serialize(PaymentResponse, record))

    async def delete_payment(self, requester: Requester, payment_id: UUID) -> dict:
        current = await load_or_404(self.store.payments, payment_id, "Payment")
        ensure_authorized(
            requester, current["user_id"],
            action="delete", resource_type="Payment", resource_id=payment_id,
        )

        await self.store.payments.delete(payment_id)
        await self.store.commit()
        return envelope({})
