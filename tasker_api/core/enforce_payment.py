"""Payment Enforcement — monotonic status transitions.

Invariants:
    - Init -> Paid and Init -> Cancelled are the only transitions
    - Re-submitting the current status is a no-op, not an error
    - Paid and Cancelled are terminal
"""

from tasker_api.core.domain_types import PaymentStatus
from tasker_api.core.errors import InvalidStatusTransitionError

_ALLOWED: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.INIT: frozenset({PaymentStatus.PAID, PaymentStatus.CANCELLED}),
    PaymentStatus.PAID: frozenset(),
    PaymentStatus.CANCELLED: frozenset(),
}


def can_transition(current: PaymentStatus, requested: PaymentStatus) -> bool:
    current, requested = PaymentStatus(current), PaymentStatus(requested)
    return current is requested or requested in _ALLOWED[current]


def check_status_transition(current: PaymentStatus, requested: PaymentStatus) -> None:
    """Raise InvalidStatusTransitionError for a reversal or terminal change."""
    if not can_transition(current, requested):
        raise InvalidStatusTransitionError(
            PaymentStatus(current).value, PaymentStatus(requested).value,
        )


def enters_paid(current: PaymentStatus, requested: PaymentStatus) -> bool:
    return PaymentStatus(current) is not PaymentStatus.PAID and (
        PaymentStatus(requested) is PaymentStatus.PAID
    )
