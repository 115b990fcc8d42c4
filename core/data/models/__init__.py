"""Database models."""

from .base import Base
from .account_model import AccountModel, AddressModel, CountryModel, RegionModel
from .order_model import OrderLineItemModel, OrderModel, ShippingDetailModel

__all__ = [
    "AccountModel",
    "AddressModel",
    "Base",
    "CountryModel",
    "OrderLineItemModel",
    "OrderModel",
    "RegionModel",
    "ShippingDetailModel",
]
