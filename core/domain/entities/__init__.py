"""Domain entities."""
from .account import Account, Address
from .cart import CartItem, CartVariant
from .order import Order, OrderLineItem, PaymentVerification, ShippingDetail

__all__ = [
    "Account",
    "Address",
    "CartItem",
    "CartVariant",
    "Order",
    "OrderLineItem",
    "PaymentVerification",
    "ShippingDetail",
]
