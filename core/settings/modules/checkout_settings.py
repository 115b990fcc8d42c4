from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from core.domain.services.shipping import ShippingTariff
from core.settings.base_settings import StorefrontBaseSettings


class CheckoutSettings(StorefrontBaseSettings):
    """
    Checkout pricing settings.
    Loaded from .env with exact variable name matching.
    """

    base_currency: str = Field(default="INR", alias="STORE_BASE_CURRENCY")
    tax_rate: Decimal = Field(default=Decimal("0.10"), alias="STORE_TAX_RATE")
    totals_tolerance: Decimal = Field(default=Decimal("0.01"), alias="STORE_TOTALS_TOLERANCE")


class ShippingSettings(StorefrontBaseSettings):
    """
    Shipping tariff settings.
    Standard shipping in the base currency is priced by 500-unit weight blocks.
    """

    base_fee: Decimal = Field(default=Decimal("50"), alias="SHIPPING_BASE_FEE")
    increment_fee: Decimal = Field(default=Decimal("40"), alias="SHIPPING_INCREMENT_FEE")
    weight_block: Decimal = Field(default=Decimal("500"), alias="SHIPPING_WEIGHT_BLOCK")
    express_fee: Decimal = Field(default=Decimal("100"), alias="SHIPPING_EXPRESS_FEE")
    foreign_express_fee: Decimal = Field(default=Decimal("10"), alias="SHIPPING_FOREIGN_EXPRESS_FEE")
    foreign_standard_fee: Decimal = Field(default=Decimal("0"), alias="SHIPPING_FOREIGN_STANDARD_FEE")

    def to_tariff(self, base_currency: str) -> ShippingTariff:
        return ShippingTariff(
            base_currency=base_currency,
            base_fee=self.base_fee,
            increment_fee=self.increment_fee,
            weight_block=self.weight_block,
            express_fee=self.express_fee,
            foreign_express_fee=self.foreign_express_fee,
            foreign_standard_fee=self.foreign_standard_fee,
        )
