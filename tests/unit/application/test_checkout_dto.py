"""Unit tests for checkout request normalization."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.application.dtos import PlaceOrderRequest, VerifyPaymentRequest
from core.domain.enums import ShippingMethod


def test_camel_case_payload_is_normalized(checkout_payload):
    request = PlaceOrderRequest.model_validate(checkout_payload)

    assert request.first_name == "Asha"
    assert request.email == "asha.menon@example.com"
    assert request.billing.line1 == "12 MG Road, Ernakulam"
    assert request.billing.postal_code == "682011"
    assert request.delivery_charge == Decimal("90.00")
    assert request.full_name == "Asha Menon"
    assert request.shipping_method_enum is ShippingMethod.STANDARD


def test_snake_case_payload_is_accepted():
    request = PlaceOrderRequest.model_validate({
        "first_name": "Ravi",
        "last_name": "Kumar",
        "email": "ravi@example.com",
        "phone": "9123456780",
        "billing": {
            "line1": "4 Residency Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "postal_code": "560025",
            "country": "India",
        },
        "items": [{"product_id": 3, "price": "250"}],
        "payment_method": "cod",
        "shipping_method": "expedited",
        "currency": "inr",
    })

    assert request.currency == "INR"
    assert request.shipping_method == "express"
    assert request.items[0].quantity == 1


def test_cart_item_aliases_and_variant():
    request = PlaceOrderRequest.model_validate({
        "firstName": "Ravi",
        "lastName": "Kumar",
        "email": "ravi@example.com",
        "phone": "9123456780",
        "billing": {
            "line1": "4 Residency Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pin": "560025",
            "country": "India",
        },
        "items": [{
            "id": 9,
            "name": "Kurta",
            "quantity": None,
            "priceDollars": "15.00",
            "selectedVariant": {"id": 2, "attributes": {"size": "M"}, "weight": "400"},
        }],
        "paymentMethod": "card",
    })

    item = request.cart_items()[0]
    assert item.product_id == 9
    assert item.title == "Kurta"
    assert item.quantity == 1
    assert item.price_foreign == Decimal("15.00")
    assert item.unit_weight == Decimal("400")
    assert item.variant.snapshot()["attributes"] == {"size": "M"}


def test_invalid_email_rejected(checkout_payload):
    checkout_payload["email"] = "not-an-email"

    with pytest.raises(ValidationError):
        PlaceOrderRequest.model_validate(checkout_payload)


def test_empty_cart_rejected(checkout_payload):
    checkout_payload["items"] = []

    with pytest.raises(ValidationError):
        PlaceOrderRequest.model_validate(checkout_payload)


def test_account_creation_requires_password(checkout_payload):
    checkout_payload["createAccount"] = True
    checkout_payload["password"] = "123"

    with pytest.raises(ValidationError, match="Password"):
        PlaceOrderRequest.model_validate(checkout_payload)


def test_separate_delivery_address_required(checkout_payload):
    checkout_payload["sameAsBilling"] = False

    with pytest.raises(ValidationError, match="Shipping address"):
        PlaceOrderRequest.model_validate(checkout_payload)


def test_unknown_shipping_method_rejected(checkout_payload):
    checkout_payload["shippingMethod"] = "teleport"

    with pytest.raises(ValidationError):
        PlaceOrderRequest.model_validate(checkout_payload)


def test_verify_request_accepts_gateway_field_names():
    request = VerifyPaymentRequest.model_validate({
        "razorpay_payment_id": "pay_1",
        "razorpay_order_id": "order_1",
        "razorpay_signature": "sig",
    })

    assert request.gateway_payment_id == "pay_1"
    assert request.gateway_order_id == "order_1"
    assert request.signature == "sig"
