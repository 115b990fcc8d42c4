"""Unit tests for order totals and client totals reconciliation."""
from decimal import Decimal

import pytest

from core.domain.entities.cart import CartItem
from core.domain.enums import ShippingMethod
from core.domain.services.pricing import (
    SuppliedTotals,
    compute_totals,
    reconcile_totals,
)


@pytest.fixture
def cart():
    return [CartItem(product_id=1, quantity=2, title="Saree", price=Decimal("500"), weight=Decimal("300"))]


def test_compute_totals_matches_checkout_example(cart):
    totals = compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD)

    assert totals.subtotal == Decimal("1000.00")
    assert totals.tax == Decimal("100.00")
    assert totals.subtotal_with_tax == Decimal("1100.00")
    assert totals.delivery_charge == Decimal("90.00")
    assert totals.total == Decimal("1190.00")


def test_discount_reduces_total(cart):
    totals = compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD, discount=Decimal("190"))

    assert totals.discount == Decimal("190.00")
    assert totals.total == Decimal("1000.00")


def test_discount_larger_than_order_is_rejected(cart):
    with pytest.raises(ValueError, match="exceeds"):
        compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD, discount=Decimal("5000"))


def test_no_shipping_method_means_no_delivery_charge(cart):
    totals = compute_totals(cart, currency="INR", method=None)

    assert totals.delivery_charge == Decimal("0")
    assert totals.total == Decimal("1100.00")


def test_foreign_currency_uses_foreign_price():
    items = [CartItem(product_id=1, quantity=1, price=Decimal("999"), price_foreign=Decimal("12.50"))]

    totals = compute_totals(items, currency="USD", method=ShippingMethod.EXPRESS)

    assert totals.subtotal == Decimal("12.50")
    assert totals.tax == Decimal("1.25")
    assert totals.delivery_charge == Decimal("10.00")
    assert totals.total == Decimal("23.75")


def test_tax_rounds_half_up():
    items = [CartItem(product_id=1, quantity=1, price=Decimal("0.05"))]

    totals = compute_totals(items, currency="INR", method=None)

    assert totals.tax == Decimal("0.01")


def test_reconcile_accepts_values_within_tolerance(cart):
    computed = compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD)
    supplied = SuppliedTotals(tax=Decimal("100.01"), delivery_charge=Decimal("90"), total=Decimal("1189.99"))

    assert reconcile_totals(supplied, computed) == []


def test_reconcile_reports_tampered_fields(cart):
    computed = compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD)
    supplied = SuppliedTotals(tax=Decimal("100"), delivery_charge=Decimal("0"), total=Decimal("1100"))

    assert reconcile_totals(supplied, computed) == ["delivery_charge", "total"]


def test_reconcile_ignores_missing_values(cart):
    computed = compute_totals(cart, currency="INR", method=ShippingMethod.STANDARD)

    assert reconcile_totals(SuppliedTotals(), computed) == []
