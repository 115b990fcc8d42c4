"""
Payment Service.

Drives the external gateway for pay-now orders: creates the remote order
the checkout widget opens, then verifies the signed payment callback.
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import PaymentIntentDTO, PaymentVerificationDTO
from core.application.interfaces import IOperatorAlertService, IPaymentGateway
from core.application.services.notification_dispatcher import NotificationDispatcher
from core.data.uow import create_uow
from core.domain.entities.order import PaymentVerification
from core.domain.events import PaymentVerifiedEvent
from core.domain.exceptions import (
    OrderNotFoundError,
    OrderValidationError,
    PaymentGatewayUnavailableError,
    PaymentVerificationError,
)
from core.utils.datetime import utc_now


logger = logging.getLogger(__name__)


class PaymentService:
    """
    Application service for gateway payments.

    Verification is idempotent: the conditional update lets exactly one
    caller flip the payment to completed, and only that caller notifies.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        dispatcher: NotificationDispatcher,
        alerts: Optional[IOperatorAlertService] = None,
    ) -> None:
        """Initialize payment service.

        Args:
            session_factory: SQLAlchemy async session factory
            gateway: Payment gateway adapter
            dispatcher: Customer notifications
            alerts: Operator alerts for unresolved gateway calls
        """
        self._session_factory = session_factory
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._alerts = alerts

    async def create_payment_intent(self, order_id: int) -> PaymentIntentDTO:
        """Create the gateway order for a pay-now order.

        Repeated calls for an unpaid order return the gateway order already
        linked to it.

        Args:
            order_id: Local order id

        Returns:
            PaymentIntentDTO with the gateway reference and amount in minor units

        Raises:
            OrderNotFoundError: Unknown order
            OrderValidationError: Cash on delivery, already paid or non-positive total
            PaymentGatewayUnavailableError: Gateway unreachable (order stays pending)
            PaymentGatewayError: Gateway rejected the request
        """
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await uow.orders.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            if not order.payment_method.requires_gateway:
                raise OrderValidationError(
                    "Cash on delivery orders are not paid through the gateway",
                    fields=["payment_method"],
                )
            if order.is_paid:
                raise OrderValidationError("Order is already paid", fields=["payment_status"])

            amount = order.total_money.to_minor_units()
            if amount <= 0:
                raise OrderValidationError("Order total must be positive", fields=["total"])

            if order.gateway_order_id:
                logger.info(
                    f"[{execution_id}] Reusing gateway order {order.gateway_order_id} for {order.order_number}"
                )
                return PaymentIntentDTO(
                    order_id=order.id,
                    gateway_order_id=order.gateway_order_id,
                    amount=amount,
                    currency=order.currency,
                    key_id=self._gateway.key_id,
                )

            logger.info(f"[{execution_id}] Creating gateway order for {order.order_number} ({amount} {order.currency})")
            try:
                gateway_order = await self._gateway.create_order(
                    amount_minor=amount,
                    currency=order.currency,
                    receipt=f"order_rcpt_{order.id}",
                    notes={"order_id": str(order.id)},
                )
            except PaymentGatewayUnavailableError as e:
                logger.error(f"[{execution_id}] ❌ Gateway unavailable for {order.order_number}: {e}")
                await self._alert(
                    f"Payment intent for {order.order_number} unresolved, payment left pending: {e}",
                    severity=80,
                )
                raise

            await uow.orders.set_gateway_order_id(order.id, gateway_order.id)
            await uow.commit()

        logger.info(f"[{execution_id}] ✅ Gateway order {gateway_order.id} linked to {order.order_number}")
        return PaymentIntentDTO(
            order_id=order.id,
            gateway_order_id=gateway_order.id,
            amount=gateway_order.amount,
            currency=gateway_order.currency,
            key_id=self._gateway.key_id,
        )

    async def verify_payment(
        self,
        order_id: int,
        gateway_payment_id: str,
        gateway_order_id: str,
        signature: str,
    ) -> PaymentVerificationDTO:
        """Authenticate a payment and mark the order paid.

        Args:
            order_id: Local order id
            gateway_payment_id: Payment id returned by the gateway
            gateway_order_id: Gateway order id the payment belongs to
            signature: HMAC of "<gateway_order_id>|<gateway_payment_id>"

        Returns:
            PaymentVerificationDTO (already_verified=True for repeated calls)

        Raises:
            OrderNotFoundError: Unknown order
            PaymentVerificationError: Cash on delivery order, no gateway order
                recorded, gateway order mismatch or invalid signature
        """
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await uow.orders.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            if not order.payment_method.requires_gateway:
                logger.warning(
                    f"[{execution_id}] ❌ Gateway payment submitted for "
                    f"{order.payment_method.value} order {order.order_number}"
                )
                raise PaymentVerificationError("Order is not paid through the gateway")
            if order.gateway_order_id is None:
                logger.warning(f"[{execution_id}] ❌ No gateway order recorded for {order.order_number}")
                raise PaymentVerificationError("No payment was initiated for this order")
            if order.gateway_order_id != gateway_order_id:
                logger.warning(
                    f"[{execution_id}] ❌ Gateway order mismatch for {order.order_number}: "
                    f"expected {order.gateway_order_id}, got {gateway_order_id}"
                )
                raise PaymentVerificationError("Payment does not belong to this order")

            payload = f"{gateway_order_id}|{gateway_payment_id}"
            if not self._gateway.verify_signature(payload, signature):
                logger.warning(f"[{execution_id}] ❌ Invalid payment signature for {order.order_number}")
                raise PaymentVerificationError("Invalid payment signature")

            verification = PaymentVerification(
                transaction_id=gateway_payment_id,
                gateway_order_id=gateway_order_id,
                signature=signature,
                verified_at=utc_now(),
            )
            changed = await uow.orders.mark_paid(order.id, verification)
            await uow.commit()

            account = await uow.accounts.get(order.account_id) if changed else None

        if not changed:
            logger.info(f"[{execution_id}] Payment for {order.order_number} already verified")
            return PaymentVerificationDTO(
                order_id=order.id,
                verified=True,
                already_verified=True,
                payment_status="completed",
            )

        order.record_payment(verification)
        confirmation_sent = await self._dispatch_events(order, account, execution_id)

        return PaymentVerificationDTO(
            order_id=order.id,
            verified=True,
            already_verified=False,
            payment_status=order.payment_status.value,
            confirmation_sent=confirmation_sent,
        )

    async def _dispatch_events(self, order, account, execution_id) -> bool:
        """Send the payment confirmation for each verified payment the order recorded."""
        sent = False
        for event in order.pull_events():
            if not isinstance(event, PaymentVerifiedEvent):
                continue
            logger.info(
                f"[{execution_id}] ✅ Payment {event.transaction_id} verified for {order.order_number} "
                f"(gateway order {event.gateway_order_id})"
            )
            if account is None:
                logger.warning(f"[{execution_id}] No account for {order.order_number}, skipping confirmation")
                continue
            sent = await self._dispatcher.payment_confirmation(order, account, execution_id) or sent
        return sent

    async def _alert(self, message: str, severity: int) -> None:
        if self._alerts is None:
            return
        try:
            await self._alerts.notify(message, severity=severity)
        except Exception as e:
            logger.error(f"Operator alert failed: {e}", exc_info=True)
