"""Domain layer - pure domain models and interfaces."""

from .entities import Account, Address, CartItem, Order, OrderLineItem, ShippingDetail
from .repositories import OrderRepository
from .value_objects import ExecutionID, Money, OrderNumber

__all__ = [
    "Account",
    "Address",
    "CartItem",
    "ExecutionID",
    "Money",
    "Order",
    "OrderLineItem",
    "OrderNumber",
    "OrderRepository",
    "ShippingDetail",
]
