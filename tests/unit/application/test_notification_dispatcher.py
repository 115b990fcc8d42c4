"""
Unit tests for customer notification dispatch.
"""
from datetime import datetime
from decimal import Decimal

import pytest

from core.application.services import NotificationDispatcher
from core.domain.entities.account import Account, Address
from core.domain.entities.order import Order, OrderLineItem, PaymentVerification, ShippingDetail
from core.domain.enums import AddressKind, OrderStatus, PaymentMethod, ShippingStatus
from core.domain.value_objects import Money
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService


@pytest.fixture
def mock_notification_service():
    """Create a mock notification service for testing."""
    return MockNotificationService()


@pytest.fixture
def dispatcher(mock_notification_service):
    return NotificationDispatcher(mock_notification_service)


@pytest.fixture
def account():
    return Account(id=1, email="asha@example.com", name="Asha Menon", password_hash="x")


@pytest.fixture
def order():
    return Order(
        id=12,
        account_id=1,
        total=Decimal("1100.00"),
        payment_method=PaymentMethod.COD,
        placed_at=datetime(2025, 3, 1, 9, 0),
        tax_amount=Decimal("100.00"),
        items=[OrderLineItem(product_id=7, unit_price=Money(Decimal("500")), quantity=2, title="Saree")],
    )


@pytest.mark.asyncio
async def test_order_confirmation_payload(dispatcher, mock_notification_service, order, account):
    sent = await dispatcher.order_confirmation(order, account)

    assert sent is True
    [notification] = mock_notification_service.get_notifications("order_confirmation")
    assert notification["recipient"] == "asha@example.com"
    data = notification["data"]
    assert data["order_number"] == "ORD-0012"
    assert data["currency_symbol"] == "₹"
    assert data["shipping"] == "Free"
    assert data["subtotal"] == "1000.00"
    assert data["total"] == "1100.00"
    assert data["items"][0]["line_total"] == "1000.00"


@pytest.mark.asyncio
async def test_payment_confirmation_includes_transaction(dispatcher, mock_notification_service, order, account):
    order.record_payment(PaymentVerification(
        transaction_id="pay_9", gateway_order_id="order_9", signature="s", verified_at=datetime(2025, 3, 1, 9, 5)
    ))

    await dispatcher.payment_confirmation(order, account)

    [notification] = mock_notification_service.get_notifications("payment_confirmation")
    assert notification["data"]["transaction_id"] == "pay_9"
    assert notification["data"]["payment_status"] == "completed"


@pytest.mark.asyncio
async def test_shipped_update_carries_tracking(dispatcher, mock_notification_service, order, account):
    order.order_status = OrderStatus.SHIPPED
    order.shipping_detail = ShippingDetail(
        courier_name="BlueDart", tracking_id="AWB1", tracking_url="https://t/AWB1", status=ShippingStatus.SHIPPED
    )

    await dispatcher.status_update(order, account)

    [notification] = mock_notification_service.get_notifications("order_status_update")
    assert notification["data"]["status"] == "shipped"
    assert "shipped" in notification["data"]["status_message"]
    assert notification["data"]["tracking"]["tracking_id"] == "AWB1"


@pytest.mark.asyncio
async def test_non_shipped_update_has_no_tracking(dispatcher, mock_notification_service, order, account):
    order.order_status = OrderStatus.CONFIRMED

    await dispatcher.status_update(order, account)

    [notification] = mock_notification_service.get_notifications("order_status_update")
    assert "tracking" not in notification["data"]


@pytest.mark.asyncio
async def test_invoice_delivery_falls_back_to_billing(dispatcher, mock_notification_service, order, account):
    billing = Address(
        id=3, account_id=1, kind=AddressKind.BILLING, name="Asha Menon", line1="12 MG Road",
        city="Kochi", postal_code="682011", country_name="India", region_name="Kerala",
    )

    await dispatcher.invoice(order, account, billing, None)

    [notification] = mock_notification_service.get_notifications("order_invoice")
    data = notification["data"]
    assert data["invoice_number"] == "INV-000012"
    assert data["delivery_address"] == data["billing_address"]
    assert data["billing_address"]["region"] == "Kerala"


@pytest.mark.asyncio
async def test_transport_failure_is_reported_not_raised(dispatcher, mock_notification_service, order, account):
    mock_notification_service.fail = True

    sent = await dispatcher.order_confirmation(order, account)

    assert sent is False
    assert mock_notification_service.get_notifications() == []
