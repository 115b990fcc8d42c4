"""
Order Pipeline Enums.

Status and method values persisted on orders, shipping details and accounts.
All enums are str-based so they serialize as their plain value.
"""
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """Order lifecycle status."""

    PLACED = "placed"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class PaymentStatus(str, Enum):
    """Payment status of an order."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    """
    Internal payment method.

    Caller-facing values (card, upi, cod and a few aliases) are mapped with
    `from_checkout()`. Anything unrecognized lands in ONLINE.
    """

    CARD = "card"
    UPI = "upi"
    COD = "cod"
    ONLINE = "online"

    @classmethod
    def from_checkout(cls, value: Optional[str]) -> "PaymentMethod":
        key = (value or "").strip().lower()
        return _CHECKOUT_PAYMENT_METHODS.get(key, cls.ONLINE)

    @property
    def requires_gateway(self) -> bool:
        """Everything except cash on delivery is paid through the gateway."""
        return self is not PaymentMethod.COD


_CHECKOUT_PAYMENT_METHODS = {
    "card": PaymentMethod.CARD,
    "upi": PaymentMethod.UPI,
    "wallet": PaymentMethod.UPI,
    "cod": PaymentMethod.COD,
    "cash_on_delivery": PaymentMethod.COD,
}


class ShippingMethod(str, Enum):
    """Shipping method chosen at checkout."""

    STANDARD = "standard"
    EXPRESS = "express"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ShippingMethod"]:
        """
        Parse a checkout shipping method.

        Args:
            value: Raw value ("standard", "express" or "expedited")

        Returns:
            ShippingMethod, or None when no method was chosen

        Raises:
            ValueError: If the value is not a known method
        """
        if value is None or not str(value).strip():
            return None
        key = str(value).strip().lower()
        if key == "expedited":
            return cls.EXPRESS
        return cls(key)


class ShippingStatus(str, Enum):
    """Status of the shipping detail attached to an order."""

    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class AccountStatus(str, Enum):
    """Account status flag."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AddressKind(str, Enum):
    """Address variant."""

    BILLING = "billing"
    DELIVERY = "delivery"
