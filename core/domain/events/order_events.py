"""
Order Domain Events.

Recorded by the Order aggregate during its lifecycle.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.enums import OrderStatus

from .base import DomainEvent


@dataclass
class _OrderEvent(DomainEvent):
    """Order event keyed by the numeric order id."""

    order_id: Optional[int] = None

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id is not None:
            object.__setattr__(self, 'aggregate_id', str(self.order_id))
        super().__post_init__()


@dataclass
class OrderStatusChangedEvent(_OrderEvent):
    """
    Order status changed.

    Trigger: Admin transition or tracking added
    Consumers: customer status-update notification
    """

    previous_status: Optional[OrderStatus] = None
    new_status: Optional[OrderStatus] = None


@dataclass
class TrackingAddedEvent(_OrderEvent):
    """Tracking information was attached to the order's shipment."""

    courier_name: str = ""
    tracking_id: str = ""
    tracking_url: Optional[str] = None


@dataclass
class PaymentVerifiedEvent(_OrderEvent):
    """Gateway payment was authenticated and the order marked paid."""

    transaction_id: str = ""
    gateway_order_id: str = ""
    verified_at: Optional[datetime] = None
