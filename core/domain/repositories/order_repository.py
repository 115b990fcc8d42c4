"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from ..entities.order import Order, PaymentVerification
from ..enums import OrderStatus


ORDER_SORTS = ("latest", "oldest", "high_value", "low_value")


@dataclass(frozen=True)
class OrderSearch:
    """Filters for the admin order list."""

    search: Optional[str] = None
    status: Optional[OrderStatus] = None
    account_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort: str = "latest"
    offset: int = 0
    limit: int = 15

    def __post_init__(self):
        if self.sort not in ORDER_SORTS:
            raise ValueError(f"Unknown sort '{self.sort}', expected one of {ORDER_SORTS}")


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order with its line items and shipping detail.

        Args:
            order: Order aggregate without ids

        Returns:
            The same aggregate with database ids assigned
        """
        pass

    @abstractmethod
    async def get(self, order_id: int) -> Optional[Order]:
        """Retrieve order by id.

        Args:
            order_id: Numeric order id

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def save_fulfilment(self, order: Order) -> None:
        """Persist order status and shipping detail changes.

        Args:
            order: Order aggregate loaded from this repository
        """
        pass

    @abstractmethod
    async def set_gateway_order_id(self, order_id: int, gateway_order_id: str) -> None:
        """Store the remote payment order reference."""
        pass

    @abstractmethod
    async def mark_paid(self, order_id: int, verification: PaymentVerification) -> bool:
        """Flip payment status to completed unless it already is.

        Args:
            order_id: Numeric order id
            verification: Verification evidence to store

        Returns:
            True if this call changed the order, False if it was already paid
        """
        pass

    @abstractmethod
    async def search(self, criteria: OrderSearch) -> Tuple[List[Order], int]:
        """List orders matching the criteria.

        Returns:
            (page of orders, total matching count)
        """
        pass

    @abstractmethod
    async def find_by_account(self, account_id: int) -> List[Order]:
        """All orders of one account, newest first."""
        pass
