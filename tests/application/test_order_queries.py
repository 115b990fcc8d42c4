"""Application tests for order listing, lookups and invoices."""
from datetime import timedelta
from decimal import Decimal

import pytest

from core.application.dtos import PlaceOrderRequest
from core.domain.enums import OrderStatus
from core.domain.exceptions import OrderNotFoundError, OrderValidationError
from core.utils.datetime import utc_now


async def place(checkout_service, payload, **changes):
    request = PlaceOrderRequest.model_validate({**payload, **changes})
    return (await checkout_service.place_order(request)).order


def second_customer(payload):
    return {
        **payload,
        "firstName": "Ravi",
        "lastName": "Kumar",
        "email": "ravi@example.com",
        "items": [{"productId": 9, "title": "Kurta", "quantity": 1, "price": "2000"}],
        "tax": None,
        "deliveryCharge": None,
        "total": None,
        "couponCode": "DIWALI10",
    }


@pytest.mark.asyncio
async def test_list_orders_paginates(checkout_service, order_service, checkout_payload):
    for _ in range(3):
        await place(checkout_service, checkout_payload)

    page = await order_service.list_orders(page=2, limit=2)

    assert page.total == 3
    assert page.total_pages == 2
    assert page.page == 2
    assert len(page.orders) == 1


@pytest.mark.asyncio
async def test_list_orders_search_and_sort(checkout_service, order_service, checkout_payload):
    asha = await place(checkout_service, checkout_payload)
    ravi = await place(checkout_service, second_customer(checkout_payload))

    by_name = await order_service.list_orders(search="ravi")
    assert [order.id for order in by_name.orders] == [ravi.id]

    by_coupon = await order_service.list_orders(search="diwali")
    assert [order.id for order in by_coupon.orders] == [ravi.id]

    by_number = await order_service.list_orders(search=asha.order_number)
    assert [order.id for order in by_number.orders] == [asha.id]

    cheapest_first = await order_service.list_orders(sort="low_value")
    assert [order.id for order in cheapest_first.orders] == [asha.id, ravi.id]
    assert cheapest_first.orders[1].total == Decimal("2200.00")


@pytest.mark.asyncio
async def test_list_orders_filters(checkout_service, status_service, order_service, checkout_payload):
    first = await place(checkout_service, checkout_payload)
    second = await place(checkout_service, second_customer(checkout_payload))
    await status_service.update_status(second.id, OrderStatus.CONFIRMED)

    confirmed = await order_service.list_orders(status=OrderStatus.CONFIRMED)
    assert [order.id for order in confirmed.orders] == [second.id]

    mine = await order_service.list_orders(account_id=first.account_id)
    assert [order.id for order in mine.orders] == [first.id]

    tomorrow = utc_now() + timedelta(days=1)
    assert (await order_service.list_orders(start_date=tomorrow)).total == 0
    assert (await order_service.list_orders(end_date=tomorrow)).total == 2


@pytest.mark.asyncio
async def test_unknown_sort_rejected(order_service):
    with pytest.raises(OrderValidationError):
        await order_service.list_orders(sort="random")


@pytest.mark.asyncio
async def test_order_details_include_addresses(checkout_service, order_service, checkout_payload):
    order = await place(checkout_service, checkout_payload)

    details = await order_service.get_order_details(order.id)

    assert details.customer.email == "asha.menon@example.com"
    assert details.billing_address.city == "Kochi"
    assert details.billing_address.region == "Kerala"
    assert details.billing_address.country == "India"
    assert details.delivery_address is None
    assert details.order.items[0].quantity == 2


@pytest.mark.asyncio
async def test_orders_for_email(checkout_service, order_service, checkout_payload):
    await place(checkout_service, checkout_payload)
    await place(checkout_service, checkout_payload)

    assert len(await order_service.orders_for_email("ASHA.MENON@example.com")) == 2
    assert await order_service.orders_for_email("nobody@example.com") == []


@pytest.mark.asyncio
async def test_track_order_requires_matching_email(checkout_service, order_service, checkout_payload):
    order = await place(checkout_service, checkout_payload)

    details = await order_service.track_order(order.id, "asha.menon@example.com")
    assert details.order.id == order.id

    with pytest.raises(OrderNotFoundError):
        await order_service.track_order(order.id, "ravi@example.com")


@pytest.mark.asyncio
async def test_send_invoice(checkout_service, order_service, checkout_payload, notifications):
    order = await place(checkout_service, checkout_payload)

    result = await order_service.send_invoice(order.id)

    assert result.sent is True
    assert result.recipient == "asha.menon@example.com"
    assert result.invoice_number == f"INV-{order.id:06d}"
    [invoice] = notifications.get_notifications("order_invoice")
    assert invoice["data"]["delivery_address"]["city"] == "Kochi"


@pytest.mark.asyncio
async def test_missing_order(order_service):
    with pytest.raises(OrderNotFoundError):
        await order_service.get_order_details(999)
