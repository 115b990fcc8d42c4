"""Unit tests for the order status machine and the Order aggregate."""
from datetime import datetime
from decimal import Decimal

import pytest

from core.domain.entities.order import (
    EXPRESS_COURIER,
    STANDARD_COURIER,
    Order,
    OrderLineItem,
    PaymentVerification,
    ShippingDetail,
)
from core.domain.enums import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingMethod,
    ShippingStatus,
)
from core.domain.events import OrderStatusChangedEvent, PaymentVerifiedEvent, TrackingAddedEvent
from core.domain.exceptions import InvalidStatusTransitionError
from core.domain.services.status_machine import (
    TERMINAL_STATUSES,
    can_transition,
    ensure_transition,
)
from core.domain.value_objects import Money


NOW = datetime(2025, 3, 1, 10, 30)


def make_order(status: OrderStatus = OrderStatus.PLACED, shipping: ShippingDetail = None) -> Order:
    return Order(
        id=42,
        account_id=1,
        total=Decimal("1190.00"),
        payment_method=PaymentMethod.CARD,
        placed_at=NOW,
        order_status=status,
        items=[OrderLineItem(product_id=7, unit_price=Money(Decimal("500")), quantity=2)],
        shipping_detail=shipping,
    )


# =============================================================================
# TRANSITION TABLE
# =============================================================================

def test_forward_path_is_allowed():
    path = [
        OrderStatus.PLACED,
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.RETURNED,
    ]
    for current, requested in zip(path, path[1:]):
        assert can_transition(current, requested)


@pytest.mark.parametrize(
    "current, requested",
    [
        (OrderStatus.DELIVERED, OrderStatus.PLACED),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.SHIPPED, OrderStatus.PROCESSING),
        (OrderStatus.PLACED, OrderStatus.RETURNED),
        (OrderStatus.CANCELLED, OrderStatus.PLACED),
        (OrderStatus.RETURNED, OrderStatus.DELIVERED),
    ],
)
def test_illegal_transitions_raise(current, requested):
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        ensure_transition(current, requested)

    assert exc_info.value.current is current
    assert exc_info.value.requested is requested
    assert exc_info.value.kind == "invalid_transition"


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {OrderStatus.CANCELLED, OrderStatus.RETURNED}


# =============================================================================
# ORDER AGGREGATE
# =============================================================================

def test_subtotal_and_money():
    order = make_order()

    assert order.subtotal == Decimal("1000")
    assert order.total_money.to_minor_units() == 119000
    assert str(order.order_number) == "ORD-0042"


def test_shipped_creates_shipping_detail_with_date():
    order = make_order()

    changed = order.transition_to(OrderStatus.SHIPPED, at=NOW)

    assert changed is True
    assert order.order_status is OrderStatus.SHIPPED
    assert order.shipping_detail.status is ShippingStatus.SHIPPED
    assert order.shipping_detail.shipping_date == NOW
    assert order.shipping_detail.courier_name == STANDARD_COURIER


def test_shipped_keeps_existing_shipping_date():
    earlier = datetime(2025, 2, 1)
    detail = ShippingDetail(courier_name=EXPRESS_COURIER, tracking_id="TR-111111", shipping_date=earlier)
    order = make_order(OrderStatus.PROCESSING, shipping=detail)

    order.transition_to(OrderStatus.SHIPPED, at=NOW)

    assert order.shipping_detail.shipping_date == earlier
    assert order.shipping_detail.courier_name == EXPRESS_COURIER


def test_delivered_marks_shipping_delivered():
    order = make_order(OrderStatus.SHIPPED, shipping=ShippingDetail.stub(ShippingMethod.STANDARD))

    order.transition_to(OrderStatus.DELIVERED, at=NOW)

    assert order.shipping_detail.status is ShippingStatus.DELIVERED


def test_same_status_is_a_noop():
    order = make_order(OrderStatus.CONFIRMED)

    assert order.transition_to(OrderStatus.CONFIRMED, at=NOW) is False
    assert order.pull_events() == []


def test_rejected_transition_leaves_order_untouched():
    order = make_order(OrderStatus.DELIVERED)

    with pytest.raises(InvalidStatusTransitionError):
        order.transition_to(OrderStatus.PLACED, at=NOW)

    assert order.order_status is OrderStatus.DELIVERED
    assert order.pull_events() == []


def test_transition_records_status_event():
    order = make_order()

    order.transition_to(OrderStatus.CONFIRMED, at=NOW)
    events = order.pull_events()

    assert len(events) == 1
    assert isinstance(events[0], OrderStatusChangedEvent)
    assert events[0].previous_status is OrderStatus.PLACED
    assert events[0].new_status is OrderStatus.CONFIRMED
    assert order.pull_events() == []


def test_tracking_advances_placed_order_to_shipped():
    order = make_order()

    advanced = order.add_tracking("AWB123", at=NOW, courier_name="BlueDart", tracking_url="https://t/AWB123")

    assert advanced is True
    assert order.order_status is OrderStatus.SHIPPED
    assert order.shipping_detail.tracking_id == "AWB123"
    assert order.shipping_detail.courier_name == "BlueDart"
    assert order.shipping_detail.shipping_date == NOW
    kinds = [type(event) for event in order.pull_events()]
    assert kinds == [TrackingAddedEvent, OrderStatusChangedEvent]


def test_tracking_on_delivered_order_does_not_change_status():
    order = make_order(OrderStatus.DELIVERED, shipping=ShippingDetail.stub(ShippingMethod.EXPRESS))

    advanced = order.add_tracking("AWB999", at=NOW, status=ShippingStatus.DELIVERED)

    assert advanced is False
    assert order.order_status is OrderStatus.DELIVERED
    assert order.shipping_detail.courier_name == EXPRESS_COURIER


def test_tracking_rejected_for_cancelled_order():
    order = make_order(OrderStatus.CANCELLED)

    with pytest.raises(InvalidStatusTransitionError):
        order.add_tracking("AWB123", at=NOW)


def test_tracking_requires_id():
    with pytest.raises(ValueError):
        make_order().add_tracking("  ", at=NOW)


def test_record_payment():
    order = make_order()
    verification = PaymentVerification(
        transaction_id="pay_1", gateway_order_id="order_1", signature="abc", verified_at=NOW
    )

    order.record_payment(verification)

    assert order.payment_status is PaymentStatus.COMPLETED
    assert order.is_paid
    assert isinstance(order.pull_events()[0], PaymentVerifiedEvent)
    assert PaymentVerification.from_dict(verification.to_dict()) == verification


def test_line_item_rejects_zero_quantity():
    with pytest.raises(ValueError):
        OrderLineItem(product_id=1, unit_price=Money(Decimal("10")), quantity=0)


def test_stub_tracking_id_format():
    detail = ShippingDetail.stub(None)

    assert detail.tracking_id.startswith("TR-")
    assert len(detail.tracking_id) == 9
    assert detail.status is ShippingStatus.PROCESSING
