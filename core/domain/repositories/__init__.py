"""Repository interfaces."""
from .account_repository import AccountRepository, AddressRepository, LocationRepository
from .order_repository import ORDER_SORTS, OrderRepository, OrderSearch

__all__ = [
    "AccountRepository",
    "AddressRepository",
    "LocationRepository",
    "ORDER_SORTS",
    "OrderRepository",
    "OrderSearch",
]
