"""
Cart line entities submitted at checkout.

CRITICAL: This file must contain ZERO imports from sqlalchemy/pydantic/fastapi
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CartVariant:
    """Variant chosen for a cart line (size, colour, ...)."""

    id: Optional[int] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    price: Optional[Decimal] = None
    weight: Optional[Decimal] = None

    def snapshot(self) -> Dict[str, Any]:
        """Serializable copy stored on the order line."""
        return {
            "id": self.id,
            "attributes": dict(self.attributes),
            "price": str(self.price) if self.price is not None else None,
        }


@dataclass(frozen=True)
class CartItem:
    """
    One cart entry.

    `price` is the local (base currency) unit price, `price_foreign` the unit
    price shown to foreign-currency shoppers. Weight falls back to the
    variant weight.
    """

    product_id: int
    quantity: int = 1
    title: str = ""
    price: Optional[Decimal] = None
    price_foreign: Optional[Decimal] = None
    weight: Optional[Decimal] = None
    variant: Optional[CartVariant] = None

    @property
    def unit_weight(self) -> Decimal:
        if self.weight:
            return Decimal(self.weight)
        if self.variant is not None and self.variant.weight:
            return Decimal(self.variant.weight)
        return Decimal("0")

    @property
    def has_weight(self) -> bool:
        return bool(self.weight) or bool(self.variant and self.variant.weight)

    def unit_price(self, local: bool) -> Decimal:
        """
        Unit price in the order currency.

        Args:
            local: True when the order is in the store's base currency
        """
        value = self.price if local else self.price_foreign
        return Decimal(value) if value is not None else Decimal("0")
