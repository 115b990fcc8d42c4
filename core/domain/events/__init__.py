"""Domain events."""
from .base import DomainEvent
from .order_events import (
    OrderStatusChangedEvent,
    PaymentVerifiedEvent,
    TrackingAddedEvent,
)

__all__ = [
    "DomainEvent",
    "OrderStatusChangedEvent",
    "PaymentVerifiedEvent",
    "TrackingAddedEvent",
]
