"""
Notification Dispatcher.

Builds template data for customer emails and hands it to the injected
notification service. Every method is best effort: a failing transport is
logged and reported as False, never raised to the caller.
"""
from decimal import Decimal
from typing import Any, Dict, Optional
import logging

from core.application.interfaces import INotificationService, NotificationTemplate
from core.domain.entities.account import Account, Address
from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.value_objects import ExecutionID, Money


logger = logging.getLogger(__name__)


STATUS_MESSAGES = {
    OrderStatus.PLACED: "We have received your order.",
    OrderStatus.CONFIRMED: "Your order has been confirmed and is being processed.",
    OrderStatus.PROCESSING: "Your order is currently being processed and prepared for shipping.",
    OrderStatus.SHIPPED: "Great news! Your order has been shipped and is on its way to you.",
    OrderStatus.DELIVERED: "Your order has been delivered. We hope you enjoy your purchase!",
    OrderStatus.CANCELLED: "Your order has been cancelled as requested.",
    OrderStatus.RETURNED: "Your return request has been processed.",
}


def _amount(value: Decimal) -> str:
    return f"{Decimal(value):.2f}"


class NotificationDispatcher:
    """Sends order confirmation, payment, status and invoice emails."""

    def __init__(self, notification_service: INotificationService):
        self._notifications = notification_service

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    async def order_confirmation(
        self,
        order: Order,
        account: Account,
        execution_id: Optional[ExecutionID] = None,
    ) -> bool:
        data = self._order_data(order, account)
        return await self._send(NotificationTemplate.ORDER_CONFIRMATION, account.email, data, execution_id)

    async def payment_confirmation(
        self,
        order: Order,
        account: Account,
        execution_id: Optional[ExecutionID] = None,
    ) -> bool:
        data = self._order_data(order, account)
        if order.payment_verification is not None:
            data["transaction_id"] = order.payment_verification.transaction_id
            data["paid_at"] = order.payment_verification.verified_at.isoformat()
        return await self._send(NotificationTemplate.PAYMENT_CONFIRMATION, account.email, data, execution_id)

    async def status_update(
        self,
        order: Order,
        account: Account,
        execution_id: Optional[ExecutionID] = None,
    ) -> bool:
        """
        Tell the customer about the order's current status.

        Shipped updates carry the tracking block when a shipment exists.
        """
        status = order.order_status
        data = self._order_data(order, account)
        data["status"] = status.value
        data["status_message"] = STATUS_MESSAGES.get(
            status, f"Your order status has been updated to: {status.value}"
        )
        if status is OrderStatus.SHIPPED and order.shipping_detail is not None:
            detail = order.shipping_detail
            data["tracking"] = {
                "courier_name": detail.courier_name,
                "tracking_id": detail.tracking_id,
                "tracking_url": detail.tracking_url,
            }
        return await self._send(NotificationTemplate.STATUS_UPDATE, account.email, data, execution_id)

    async def invoice(
        self,
        order: Order,
        account: Account,
        billing: Optional[Address],
        delivery: Optional[Address],
        execution_id: Optional[ExecutionID] = None,
    ) -> bool:
        """Send the invoice; delivery address falls back to billing."""
        data = self._order_data(order, account)
        data["invoice_number"] = order.order_number.invoice_number
        data["billing_address"] = self._address_data(billing)
        data["delivery_address"] = self._address_data(delivery or billing)
        return await self._send(NotificationTemplate.INVOICE, account.email, data, execution_id)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _send(
        self,
        template: NotificationTemplate,
        recipient: str,
        data: Dict[str, Any],
        execution_id: Optional[ExecutionID],
    ) -> bool:
        prefix = f"[{execution_id}] " if execution_id else ""
        try:
            sent = await self._notifications.send(template, recipient, data)
        except Exception as e:
            logger.error(
                f"{prefix}❌ Notification {template.value} for {data.get('order_number')} failed: {e}",
                exc_info=True,
            )
            return False

        if not sent:
            logger.warning(f"{prefix}Notification {template.value} for {data.get('order_number')} not accepted")
        return bool(sent)

    def _order_data(self, order: Order, account: Account) -> Dict[str, Any]:
        symbol = Money(amount=order.total, currency=order.currency).symbol
        return {
            "order_id": order.id,
            "order_number": str(order.order_number) if order.id else None,
            "placed_at": order.placed_at.isoformat(),
            "customer_name": account.name,
            "currency": order.currency,
            "currency_symbol": symbol,
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "order_status": order.order_status.value,
            "items": [
                {
                    "title": item.title,
                    "quantity": item.quantity,
                    "unit_price": _amount(item.unit_price.amount),
                    "line_total": _amount(item.total.amount),
                    "variation": item.variation,
                }
                for item in order.items
            ],
            "subtotal": _amount(order.subtotal),
            "tax": _amount(order.tax_amount),
            "shipping": "Free" if order.delivery_charge == 0 else _amount(order.delivery_charge),
            "discount": _amount(order.discount_amount),
            "coupon_code": order.coupon_code,
            "total": _amount(order.total),
        }

    @staticmethod
    def _address_data(address: Optional[Address]) -> Optional[Dict[str, Any]]:
        if address is None:
            return None
        return {
            "name": address.name,
            "line1": address.line1,
            "line2": address.line2,
            "city": address.city,
            "region": address.region_name,
            "postal_code": address.postal_code,
            "country": address.country_name,
            "phone": address.phone,
        }
