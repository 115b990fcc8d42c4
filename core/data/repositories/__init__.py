"""SQLAlchemy repository implementations."""
from .account_repository_impl import (
    SqlAlchemyAccountRepository,
    SqlAlchemyAddressRepository,
    SqlAlchemyLocationRepository,
)
from .order_repository_impl import SqlAlchemyOrderRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyAddressRepository",
    "SqlAlchemyLocationRepository",
    "SqlAlchemyOrderRepository",
]
