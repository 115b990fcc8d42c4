"""SQLAlchemy implementation of OrderRepository."""

from datetime import datetime, time
from typing import List, Optional, Tuple
import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order, PaymentVerification
from core.domain.enums import PaymentStatus
from core.domain.repositories.order_repository import OrderRepository, OrderSearch

from ..mappers import OrderLineItemMapper, OrderMapper, ShippingDetailMapper
from ..models.account_model import AccountModel
from ..models.order_model import OrderModel


logger = logging.getLogger(__name__)


_SORT_COLUMNS = {
    "latest": (OrderModel.placed_at.desc(), OrderModel.id.desc()),
    "oldest": (OrderModel.placed_at.asc(), OrderModel.id.asc()),
    "high_value": (OrderModel.total.desc(), OrderModel.id.desc()),
    "low_value": (OrderModel.total.asc(), OrderModel.id.asc()),
}


def _end_of_day(value: datetime) -> datetime:
    """Date-only upper bounds include the whole day."""
    if value.time() == time.min:
        return datetime.combine(value.date(), time.max)
    return value


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    def _select_orders(self):
        return select(OrderModel).options(
            selectinload(OrderModel.items),
            selectinload(OrderModel.shipping_detail),
        )

    async def add(self, order: Order) -> Order:
        """Insert order header, line items and shipping detail.

        Each insert is flushed so a failing line surfaces inside the caller's
        transaction, before commit.

        Args:
            order: Order domain aggregate without ids

        Returns:
            The aggregate with ids assigned
        """
        order_model = OrderMapper.to_persistence(order)
        self._session.add(order_model)
        await self._session.flush()
        order.id = order_model.id

        for item in order.items:
            item_model = OrderLineItemMapper.to_persistence(item, order.id)
            self._session.add(item_model)
            await self._session.flush()
            item.id = item_model.id

        if order.shipping_detail is not None:
            detail_model = ShippingDetailMapper.to_persistence(order.shipping_detail, order.id)
            self._session.add(detail_model)
            await self._session.flush()
            order.shipping_detail.id = detail_model.id

        logger.info(f"✅ Order {order.id} inserted with {len(order.items)} line items")
        return order

    async def get(self, order_id: int) -> Optional[Order]:
        """Retrieve order by id.

        Args:
            order_id: Numeric order id

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            self._select_orders().where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def save_fulfilment(self, order: Order) -> None:
        """Persist status and shipping detail of an existing order.

        Args:
            order: Order aggregate loaded from this repository

        Raises:
            ValueError: If the order no longer exists
        """
        result = await self._session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.shipping_detail))
            .where(OrderModel.id == order.id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            raise ValueError(f"Order {order.id} does not exist")

        model.order_status = order.order_status.value

        if order.shipping_detail is not None:
            if model.shipping_detail is None:
                detail_model = ShippingDetailMapper.to_persistence(order.shipping_detail, order.id)
                self._session.add(detail_model)
            else:
                ShippingDetailMapper.update_persistence(model.shipping_detail, order.shipping_detail)

        await self._session.flush()

    async def set_gateway_order_id(self, order_id: int, gateway_order_id: str) -> None:
        await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(gateway_order_id=gateway_order_id)
            .execution_options(synchronize_session=False)
        )

    async def mark_paid(self, order_id: int, verification: PaymentVerification) -> bool:
        """Conditionally flip payment status to completed.

        Only one of several concurrent callers can match the WHERE clause;
        the others see rowcount 0.

        Args:
            order_id: Numeric order id
            verification: Verification evidence to store

        Returns:
            True if this call changed the row
        """
        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.payment_status != PaymentStatus.COMPLETED.value,
            )
            .values(
                payment_status=PaymentStatus.COMPLETED.value,
                payment_details=verification.to_dict(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def search(self, criteria: OrderSearch) -> Tuple[List[Order], int]:
        """List orders matching the criteria.

        Args:
            criteria: Filters, sort and paging

        Returns:
            (page of orders, total matching count)
        """
        conditions = []

        if criteria.search:
            term = criteria.search.strip()
            like = f"%{term}%"
            matches = [
                AccountModel.name.ilike(like),
                AccountModel.email.ilike(like),
                OrderModel.coupon_code.ilike(like),
            ]
            digits = term.upper().removeprefix("ORD-")
            if digits.isdigit():
                matches.append(OrderModel.id == int(digits))
            conditions.append(or_(*matches))

        if criteria.status is not None:
            conditions.append(OrderModel.order_status == criteria.status.value)
        if criteria.account_id is not None:
            conditions.append(OrderModel.account_id == criteria.account_id)
        if criteria.start_date is not None:
            conditions.append(OrderModel.placed_at >= criteria.start_date)
        if criteria.end_date is not None:
            conditions.append(OrderModel.placed_at <= _end_of_day(criteria.end_date))

        count_query = (
            select(func.count(OrderModel.id))
            .join(AccountModel, AccountModel.id == OrderModel.account_id)
            .where(*conditions)
        )
        total = (await self._session.execute(count_query)).scalar_one()

        query = (
            self._select_orders()
            .join(AccountModel, AccountModel.id == OrderModel.account_id)
            .where(*conditions)
            .order_by(*_SORT_COLUMNS[criteria.sort])
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        result = await self._session.execute(query)
        orders = [OrderMapper.to_domain(model) for model in result.scalars().all()]

        logger.info(f"✅ Found {len(orders)} of {total} orders (sort={criteria.sort})")
        return orders, total

    async def find_by_account(self, account_id: int) -> List[Order]:
        result = await self._session.execute(
            self._select_orders()
            .where(OrderModel.account_id == account_id)
            .order_by(*_SORT_COLUMNS["latest"])
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]
