"""Application service for Order queries and invoices."""

from datetime import datetime
import logging
import math
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import (
    AccountContactDTO,
    AddressDTO,
    InvoiceResultDTO,
    OrderDetailDTO,
    OrderDTO,
    OrderListDTO,
)
from core.application.services.notification_dispatcher import NotificationDispatcher
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities.order import Order
from core.domain.enums import AddressKind, OrderStatus
from core.domain.exceptions import OrderNotFoundError, OrderValidationError
from core.domain.repositories.order_repository import OrderSearch


logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for reading orders.

    Responsibilities:
    - Admin list with search, filters, sort and paging
    - Order details with customer and latest addresses
    - Guest order lookup and tracking by email
    - Invoice emails
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        dispatcher: Optional[NotificationDispatcher] = None,
    ) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            dispatcher: Customer notifications (needed for invoices)
        """
        self._session_factory = session_factory
        self._dispatcher = dispatcher

    async def list_orders(
        self,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 15,
        sort: str = "latest",
        status: Optional[OrderStatus] = None,
        account_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> OrderListDTO:
        """List orders with pagination.

        Args:
            search: Customer name/email, coupon code or order number
            page: 1-based page number
            limit: Page size
            sort: latest | oldest | high_value | low_value
            status: Only orders in this status
            account_id: Only orders of this account
            start_date: Placed on or after
            end_date: Placed on or before (a bare date covers the whole day)

        Returns:
            OrderListDTO
        """
        page = max(page, 1)
        try:
            criteria = OrderSearch(
                search=search,
                status=status,
                account_id=account_id,
                start_date=start_date,
                end_date=end_date,
                sort=sort,
                offset=(page - 1) * limit,
                limit=limit,
            )
        except ValueError as e:
            raise OrderValidationError(str(e), fields=["sort"]) from e

        uow = create_uow(self._session_factory)
        async with uow:
            orders, total = await uow.orders.search(criteria)

        return OrderListDTO(
            orders=[OrderDTO.from_domain(order) for order in orders],
            total=total,
            page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
        )

    async def get_order_details(self, order_id: int) -> OrderDetailDTO:
        """Get order with customer contact and latest addresses.

        Raises:
            OrderNotFoundError: Unknown order
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._require_order(uow, order_id)
            return await self._details(uow, order)

    async def orders_for_email(self, email: str) -> List[OrderDTO]:
        """All orders of the account registered with `email`, newest first."""
        uow = create_uow(self._session_factory)
        async with uow:
            account = await uow.accounts.find_by_email(email.strip().lower())
            if account is None:
                return []
            orders = await uow.orders.find_by_account(account.id)
            return [OrderDTO.from_domain(order) for order in orders]

    async def track_order(self, order_id: int, email: str) -> OrderDetailDTO:
        """Guest tracking: details only when the email owns the order.

        Raises:
            OrderNotFoundError: Unknown order or email mismatch
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._require_order(uow, order_id)
            account = await uow.accounts.get(order.account_id)
            if account is None or account.email != email.strip().lower():
                logger.warning(f"Tracking lookup for {order.order_number} with non-matching email")
                raise OrderNotFoundError(order_id)
            return await self._details(uow, order)

    async def send_invoice(self, order_id: int) -> InvoiceResultDTO:
        """Email the invoice for an order.

        Raises:
            OrderNotFoundError: Unknown order
        """
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await self._require_order(uow, order_id)
            account = await uow.accounts.get(order.account_id)
            billing = await uow.addresses.latest(order.account_id, AddressKind.BILLING)
            delivery = await uow.addresses.latest(order.account_id, AddressKind.DELIVERY)

        sent = False
        if self._dispatcher is not None and account is not None:
            sent = await self._dispatcher.invoice(order, account, billing, delivery, execution_id)

        logger.info(
            f"[{execution_id}] Invoice {order.order_number.invoice_number} "
            f"{'sent' if sent else 'NOT sent'} to {account.email if account else '-'}"
        )
        return InvoiceResultDTO(
            order_id=order.id,
            invoice_number=order.order_number.invoice_number,
            recipient=account.email if account else "",
            sent=sent,
        )

    async def _require_order(self, uow: UnitOfWork, order_id: int) -> Order:
        order = await uow.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def _details(self, uow: UnitOfWork, order: Order) -> OrderDetailDTO:
        account = await uow.accounts.get(order.account_id)
        billing = await uow.addresses.latest(order.account_id, AddressKind.BILLING)
        delivery = await uow.addresses.latest(order.account_id, AddressKind.DELIVERY)
        return OrderDetailDTO(
            order=OrderDTO.from_domain(order),
            customer=AccountContactDTO.from_domain(account),
            billing_address=AddressDTO.from_domain(billing) if billing else None,
            delivery_address=AddressDTO.from_domain(delivery) if delivery else None,
        )
