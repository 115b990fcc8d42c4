"""
Order status transition table.

placed -> confirmed -> processing -> shipped -> delivered, with cancellation
available until delivery and returns only after delivery. Cancelled and
returned are terminal.
"""
from typing import Dict, FrozenSet

from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidStatusTransitionError


ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.CONFIRMED: frozenset({
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.PROCESSING: frozenset({
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.SHIPPED: frozenset({
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.DELIVERED: frozenset({
        OrderStatus.RETURNED,
    }),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.RETURNED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    """True when `requested` is reachable from `current` in one step."""
    return requested in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: OrderStatus, requested: OrderStatus) -> None:
    """
    Validate a status change.

    Args:
        current: Status the order is in
        requested: Status the caller asked for

    Raises:
        InvalidStatusTransitionError: If the table does not allow it
    """
    if not can_transition(current, requested):
        raise InvalidStatusTransitionError(current, requested)
