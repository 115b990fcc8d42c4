"""
Shipping cost calculation.

Pure functions over cart lines. No I/O, no clock, no randomness.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from core.domain.entities.cart import CartItem
from core.domain.enums import ShippingMethod


@dataclass(frozen=True)
class ShippingTariff:
    """
    Shipping price table.

    Standard shipping in the base currency is weight tiered: `base_fee`
    covers the first `weight_block` units and every further block (rounded
    up) adds `increment_fee`. Express and foreign-currency orders pay flat
    fees.
    """

    base_currency: str = "INR"
    base_fee: Decimal = Decimal("50")
    increment_fee: Decimal = Decimal("40")
    weight_block: Decimal = Decimal("500")
    express_fee: Decimal = Decimal("100")
    foreign_express_fee: Decimal = Decimal("10")
    foreign_standard_fee: Decimal = Decimal("0")

    def __post_init__(self):
        if self.weight_block <= 0:
            raise ValueError(f"Weight block must be positive, got: {self.weight_block}")


DEFAULT_TARIFF = ShippingTariff()


def tiered_cost(total_weight: Decimal, tariff: ShippingTariff = DEFAULT_TARIFF) -> Decimal:
    """
    Weight tier price for standard shipping.

    Args:
        total_weight: Sum of unit weight x quantity
        tariff: Price table

    Returns:
        0 for non-positive weight, otherwise base + extra blocks x increment
    """
    weight = Decimal(total_weight)
    if weight <= 0:
        return Decimal("0")
    extra = max(Decimal("0"), weight - tariff.weight_block)
    blocks = math.ceil(extra / tariff.weight_block)
    return Decimal(tariff.base_fee) + blocks * Decimal(tariff.increment_fee)


def compute_shipping(
    items: Iterable[CartItem],
    method: ShippingMethod,
    currency: str,
    tariff: ShippingTariff = DEFAULT_TARIFF,
) -> Decimal:
    """
    Shipping charge for a cart.

    Args:
        items: Cart lines
        method: Standard or express
        currency: Order currency code
        tariff: Price table

    Returns:
        Shipping charge in the order currency
    """
    express = method is ShippingMethod.EXPRESS

    if currency.upper() != tariff.base_currency.upper():
        return Decimal(tariff.foreign_express_fee if express else tariff.foreign_standard_fee)

    if express:
        return Decimal(tariff.express_fee)

    items = list(items)
    if not any(item.has_weight for item in items):
        return Decimal("0")

    total_weight = sum(
        (item.unit_weight * item.quantity for item in items), Decimal("0")
    )
    return tiered_cost(total_weight, tariff)
