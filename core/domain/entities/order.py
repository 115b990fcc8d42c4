"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
import random
from typing import Any, Dict, List, Optional

from ..enums import OrderStatus, PaymentMethod, PaymentStatus, ShippingMethod, ShippingStatus
from ..events.base import DomainEvent
from ..events.order_events import (
    OrderStatusChangedEvent,
    PaymentVerifiedEvent,
    TrackingAddedEvent,
)
from ..exceptions import InvalidStatusTransitionError
from ..services.status_machine import TERMINAL_STATUSES, ensure_transition
from ..value_objects import Money, OrderNumber


STANDARD_COURIER = "Standard Shipping"
EXPRESS_COURIER = "Express Courier"


def generate_tracking_id() -> str:
    """Placeholder tracking id until the courier assigns one."""
    return f"TR-{random.randint(100000, 999999)}"


@dataclass
class OrderLineItem:
    """Line item with the price snapshot taken at purchase time."""

    product_id: int
    unit_price: Money
    quantity: int = 1
    title: str = ""
    variant_id: Optional[int] = None
    variation: Optional[Dict[str, Any]] = None
    id: Optional[int] = None

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive, got: {self.quantity}")

    @property
    def total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class ShippingDetail:
    """Shipment attached to an order (at most one)."""

    courier_name: str
    tracking_id: str
    status: ShippingStatus = ShippingStatus.PROCESSING
    tracking_url: Optional[str] = None
    shipping_date: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def stub(cls, method: Optional[ShippingMethod]) -> "ShippingDetail":
        """Shipping detail created at checkout, before dispatch."""
        courier = EXPRESS_COURIER if method is ShippingMethod.EXPRESS else STANDARD_COURIER
        return cls(courier_name=courier, tracking_id=generate_tracking_id())


@dataclass(frozen=True)
class PaymentVerification:
    """Evidence that a gateway payment was authenticated."""

    transaction_id: str
    gateway_order_id: str
    signature: str
    verified_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_id": self.transaction_id,
            "gateway_order_id": self.gateway_order_id,
            "signature": self.signature,
            "verified_at": self.verified_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentVerification":
        return cls(
            transaction_id=data["transaction_id"],
            gateway_order_id=data["gateway_order_id"],
            signature=data["signature"],
            verified_at=datetime.fromisoformat(data["verified_at"]),
        )


@dataclass
class Order:
    """
    Order aggregate root.

    Totals are fixed at creation: total = subtotal + tax + delivery - discount.
    After that only the status machine (transition_to, add_tracking) and
    payment verification change the order.
    """

    account_id: int
    total: Decimal
    payment_method: PaymentMethod
    placed_at: datetime
    currency: str = "INR"
    payment_status: PaymentStatus = PaymentStatus.PENDING
    order_status: OrderStatus = OrderStatus.PLACED
    delivery_charge: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    coupon_code: Optional[str] = None
    notes: Optional[str] = None
    gateway_order_id: Optional[str] = None
    payment_verification: Optional[PaymentVerification] = None
    items: List[OrderLineItem] = field(default_factory=list)
    shipping_detail: Optional[ShippingDetail] = None
    id: Optional[int] = None

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    # =========================================================================
    # DERIVED VALUES
    # =========================================================================

    @property
    def order_number(self) -> Optional[OrderNumber]:
        return OrderNumber(self.id) if self.id else None

    @property
    def subtotal(self) -> Decimal:
        """Sum of line totals, before tax."""
        return sum((item.total.amount for item in self.items), Decimal("0"))

    @property
    def total_money(self) -> Money:
        return Money(amount=self.total, currency=self.currency)

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.COMPLETED

    # =========================================================================
    # STATUS MACHINE
    # =========================================================================

    def transition_to(self, new_status: OrderStatus, at: datetime) -> bool:
        """
        Move the order to `new_status` and apply shipping side effects.

        Args:
            new_status: Requested status
            at: Timestamp used for shipping dates

        Returns:
            False when the order already has that status (no-op), True otherwise

        Raises:
            InvalidStatusTransitionError: If the transition table forbids it
        """
        if new_status is self.order_status:
            return False

        ensure_transition(self.order_status, new_status)

        if new_status is OrderStatus.SHIPPED:
            detail = self._ensure_shipping_detail()
            detail.status = ShippingStatus.SHIPPED
            if detail.shipping_date is None:
                detail.shipping_date = at
        elif new_status is OrderStatus.DELIVERED:
            detail = self._ensure_shipping_detail()
            detail.status = ShippingStatus.DELIVERED
            if detail.shipping_date is None:
                detail.shipping_date = at

        self._set_status(new_status)
        return True

    def add_tracking(
        self,
        tracking_id: str,
        at: datetime,
        courier_name: Optional[str] = None,
        tracking_url: Optional[str] = None,
        status: Optional[ShippingStatus] = None,
    ) -> bool:
        """
        Attach tracking information, creating the shipping detail if needed.

        Orders that are not yet shipped or delivered are advanced to shipped.

        Args:
            tracking_id: Courier tracking number (required)
            at: Dispatch timestamp
            courier_name: Courier; keeps the existing one when omitted
            tracking_url: Public tracking link
            status: Shipping status, defaults to shipped

        Returns:
            True when the order status was advanced to shipped

        Raises:
            ValueError: If tracking_id is empty
            InvalidStatusTransitionError: If the order is cancelled or returned
        """
        if not tracking_id or not tracking_id.strip():
            raise ValueError("Tracking ID is required")
        if self.order_status in TERMINAL_STATUSES:
            raise InvalidStatusTransitionError(self.order_status, OrderStatus.SHIPPED)

        detail = self.shipping_detail
        if detail is None:
            detail = ShippingDetail(
                courier_name=courier_name or STANDARD_COURIER,
                tracking_id=tracking_id.strip(),
            )
            self.shipping_detail = detail
        else:
            detail.courier_name = courier_name or detail.courier_name or STANDARD_COURIER
            detail.tracking_id = tracking_id.strip()

        detail.tracking_url = tracking_url
        detail.status = status or ShippingStatus.SHIPPED
        detail.shipping_date = at

        self._record_event(TrackingAddedEvent(
            order_id=self.id,
            courier_name=detail.courier_name,
            tracking_id=detail.tracking_id,
            tracking_url=detail.tracking_url,
        ))

        if self.order_status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            return False

        self._set_status(OrderStatus.SHIPPED)
        return True

    # =========================================================================
    # PAYMENT
    # =========================================================================

    def record_payment(self, verification: PaymentVerification) -> None:
        """Mark the order paid with the given verification evidence."""
        self.payment_status = PaymentStatus.COMPLETED
        self.payment_verification = verification
        self._record_event(PaymentVerifiedEvent(
            order_id=self.id,
            transaction_id=verification.transaction_id,
            gateway_order_id=verification.gateway_order_id,
            verified_at=verification.verified_at,
        ))

    # =========================================================================
    # EVENTS
    # =========================================================================

    def pull_events(self) -> List[DomainEvent]:
        """Return and clear the events recorded since the last pull."""
        events, self._domain_events = self._domain_events, []
        return events

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def _set_status(self, new_status: OrderStatus) -> None:
        previous = self.order_status
        self.order_status = new_status
        self._record_event(OrderStatusChangedEvent(
            order_id=self.id,
            previous_status=previous,
            new_status=new_status,
        ))

    def _ensure_shipping_detail(self) -> ShippingDetail:
        if self.shipping_detail is None:
            self.shipping_detail = ShippingDetail.stub(ShippingMethod.STANDARD)
        return self.shipping_detail
