"""Domain enumerations."""

from .order_status import (
    AccountStatus,
    AddressKind,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingMethod,
    ShippingStatus,
)

__all__ = [
    "AccountStatus",
    "AddressKind",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingMethod",
    "ShippingStatus",
]
