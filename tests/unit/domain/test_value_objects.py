"""Unit tests for Money and OrderNumber."""
from decimal import Decimal

import pytest

from core.domain.value_objects import Money, OrderNumber, round_money


def test_money_converts_to_decimal_and_upper_currency():
    money = Money(amount=10.5, currency="usd")

    assert money.amount == Decimal("10.5")
    assert money.currency == "USD"


def test_money_rejects_bad_currency():
    with pytest.raises(ValueError):
        Money(amount=Decimal("1"), currency="RUPEE")


def test_money_arithmetic():
    a = Money(Decimal("500"))
    b = Money(Decimal("90"))

    assert (a * 2 + b).amount == Decimal("1090")
    assert (a - b).amount == Decimal("410")


def test_money_cannot_mix_currencies():
    with pytest.raises(ValueError, match="different currencies"):
        Money(Decimal("1"), "INR") + Money(Decimal("1"), "USD")


@pytest.mark.parametrize(
    "amount, minor",
    [
        ("1190", 119000),
        ("1190.00", 119000),
        ("0.015", 2),
        ("12.345", 1235),
    ],
)
def test_to_minor_units(amount, minor):
    assert Money(Decimal(amount)).to_minor_units() == minor


def test_symbol():
    assert Money(Decimal("1"), "INR").symbol == "₹"
    assert Money(Decimal("1"), "USD").symbol == "$"


def test_round_money_half_up():
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("2.674")) == Decimal("2.67")


def test_order_number_formats():
    number = OrderNumber(7)

    assert str(number) == "ORD-0007"
    assert number.invoice_number == "INV-000007"
    assert OrderNumber(123456).display == "ORD-123456"


@pytest.mark.parametrize("text", ["ORD-0042", "ord-42", " 42 "])
def test_order_number_parse(text):
    assert OrderNumber.parse(text) == OrderNumber(42)


@pytest.mark.parametrize("text", ["ORD-", "INV-0001", "abc"])
def test_order_number_parse_rejects_garbage(text):
    with pytest.raises(ValueError):
        OrderNumber.parse(text)
