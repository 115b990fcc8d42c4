"""
Order totals computation and reconciliation.

Server-side totals are authoritative. Totals supplied by the client are only
checked against them within a tolerance.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from core.domain.entities.cart import CartItem
from core.domain.enums import ShippingMethod
from core.domain.services.shipping import DEFAULT_TARIFF, ShippingTariff, compute_shipping
from core.domain.value_objects import round_money


DEFAULT_TAX_RATE = Decimal("0.10")
DEFAULT_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class OrderTotals:
    """Monetary breakdown of an order. total = subtotal + tax + delivery - discount."""

    subtotal: Decimal
    tax: Decimal
    delivery_charge: Decimal
    discount: Decimal
    total: Decimal

    @property
    def subtotal_with_tax(self) -> Decimal:
        return self.subtotal + self.tax


@dataclass(frozen=True)
class SuppliedTotals:
    """Totals as computed by the client. Missing values are not checked."""

    tax: Optional[Decimal] = None
    delivery_charge: Optional[Decimal] = None
    total: Optional[Decimal] = None


def compute_totals(
    items: Iterable[CartItem],
    currency: str,
    method: Optional[ShippingMethod],
    tariff: ShippingTariff = DEFAULT_TARIFF,
    tax_rate: Decimal = DEFAULT_TAX_RATE,
    discount: Decimal = Decimal("0"),
) -> OrderTotals:
    """
    Compute order totals from cart lines.

    Args:
        items: Cart lines
        currency: Order currency
        method: Shipping method, None when nothing ships
        tariff: Shipping price table (also defines the base currency)
        tax_rate: Flat tax rate applied to the subtotal
        discount: Discount already granted by the coupon engine

    Returns:
        OrderTotals with every amount rounded to cents

    Raises:
        ValueError: If the discount is negative or exceeds the order value
    """
    items = list(items)
    local = currency.upper() == tariff.base_currency.upper()

    subtotal = round_money(sum(
        (item.unit_price(local) * item.quantity for item in items), Decimal("0")
    ))
    tax = round_money(subtotal * Decimal(tax_rate))
    delivery = Decimal("0")
    if method is not None:
        delivery = round_money(compute_shipping(items, method, currency, tariff))

    discount = round_money(Decimal(discount or 0))
    gross = subtotal + tax + delivery
    if discount < 0:
        raise ValueError(f"Discount cannot be negative: {discount}")
    if discount > gross:
        raise ValueError(f"Discount {discount} exceeds order value {gross}")

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        delivery_charge=delivery,
        discount=discount,
        total=gross - discount,
    )


def reconcile_totals(
    supplied: SuppliedTotals,
    computed: OrderTotals,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> List[str]:
    """
    Compare client totals against server totals.

    Returns:
        Names of the fields that differ by more than `tolerance`
    """
    pairs: Dict[str, tuple] = {
        "tax": (supplied.tax, computed.tax),
        "delivery_charge": (supplied.delivery_charge, computed.delivery_charge),
        "total": (supplied.total, computed.total),
    }
    return [
        name
        for name, (given, expected) in pairs.items()
        if given is not None and abs(Decimal(given) - expected) > tolerance
    ]
