"""
Order Status Service.

Applies admin status transitions and tracking updates through the Order
aggregate's state machine, then notifies the customer after commit.
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import OrderDTO, StatusChangeDTO
from core.application.services.notification_dispatcher import NotificationDispatcher
from core.data.uow import create_uow
from core.domain.enums import OrderStatus, ShippingStatus
from core.domain.events import OrderStatusChangedEvent, TrackingAddedEvent
from core.domain.exceptions import OrderNotFoundError, OrderValidationError
from core.utils.datetime import utc_now


logger = logging.getLogger(__name__)


class OrderStatusService:
    """Application service for order status changes and shipment tracking."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher

    async def update_status(self, order_id: int, new_status: OrderStatus) -> StatusChangeDTO:
        """Transition an order.

        Args:
            order_id: Local order id
            new_status: Requested status

        Returns:
            StatusChangeDTO; changed=False when the order already had that status

        Raises:
            OrderNotFoundError: Unknown order
            InvalidStatusTransitionError: Transition not allowed
        """
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await uow.orders.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            previous = order.order_status
            changed = order.transition_to(new_status, at=utc_now())
            if changed:
                await uow.orders.save_fulfilment(order)
                await uow.commit()
                account = await uow.accounts.get(order.account_id)

        if not changed:
            logger.info(f"[{execution_id}] {order.order_number} already {new_status.value}, nothing to do")
            return StatusChangeDTO(
                order=OrderDTO.from_domain(order),
                previous_status=previous.value,
                changed=False,
            )

        logger.info(
            f"[{execution_id}] ✅ {order.order_number} status {previous.value} -> {new_status.value}"
        )
        sent = await self._dispatch_events(order, account, execution_id)
        return StatusChangeDTO(
            order=OrderDTO.from_domain(order),
            previous_status=previous.value,
            changed=True,
            notification_sent=sent,
        )

    async def add_tracking(
        self,
        order_id: int,
        tracking_id: str,
        courier_name: Optional[str] = None,
        tracking_url: Optional[str] = None,
        status: Optional[ShippingStatus] = None,
    ) -> StatusChangeDTO:
        """Attach tracking to an order's shipment.

        Orders not yet shipped or delivered are advanced to shipped and the
        customer receives the shipped notification.

        Args:
            order_id: Local order id
            tracking_id: Courier tracking number
            courier_name: Courier name (keeps the current one when omitted)
            tracking_url: Public tracking link
            status: Shipping status (default shipped)

        Returns:
            StatusChangeDTO; changed=True when the order status advanced

        Raises:
            OrderNotFoundError: Unknown order
            OrderValidationError: Empty tracking id
            InvalidStatusTransitionError: Cancelled or returned order
        """
        if not tracking_id or not tracking_id.strip():
            raise OrderValidationError("Tracking ID is required", fields=["tracking_id"])

        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await uow.orders.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            previous = order.order_status
            advanced = order.add_tracking(
                tracking_id,
                at=utc_now(),
                courier_name=courier_name,
                tracking_url=tracking_url,
                status=status,
            )
            await uow.orders.save_fulfilment(order)
            await uow.commit()
            account = await uow.accounts.get(order.account_id) if advanced else None

        sent = await self._dispatch_events(order, account, execution_id)

        return StatusChangeDTO(
            order=OrderDTO.from_domain(order),
            previous_status=previous.value,
            changed=advanced,
            notification_sent=sent,
        )

    async def _dispatch_events(self, order, account, execution_id) -> bool:
        """Log tracking updates and send one status email per recorded status change."""
        sent = False
        for event in order.pull_events():
            if isinstance(event, TrackingAddedEvent):
                logger.info(
                    f"[{execution_id}] ✅ Tracking {event.tracking_id} ({event.courier_name}) "
                    f"added to {order.order_number}"
                )
                continue
            if not isinstance(event, OrderStatusChangedEvent):
                continue
            if account is None:
                logger.warning(f"[{execution_id}] No account for {order.order_number}, skipping notification")
                continue
            sent = await self._dispatcher.status_update(order, account, execution_id) or sent
        return sent
