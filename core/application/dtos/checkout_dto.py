"""
Checkout request DTOs.

Every inbound shape (snake_case or camelCase JSON from the storefront) is
normalized here into one typed request before it reaches the services.
"""

from decimal import Decimal
import re
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.domain.entities.cart import CartItem, CartVariant
from core.domain.enums import OrderStatus, ShippingMethod, ShippingStatus


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_REQUEST_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
    frozen=True,
)


class AddressInput(BaseModel):
    """Billing or delivery address as typed at checkout."""

    model_config = _REQUEST_CONFIG

    line1: str = Field(
        ...,
        min_length=5,
        validation_alias=AliasChoices("line1", "address1", "addressLine1"),
        description="Street address",
    )
    line2: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("line2", "address2", "addressLine2", "apartment"),
        description="Apartment, suite, etc.",
    )
    city: str = Field(..., min_length=2)
    state: str = Field(..., min_length=2, description="State / region name")
    postal_code: str = Field(
        ...,
        min_length=5,
        validation_alias=AliasChoices("postal_code", "postalCode", "pin", "zip"),
    )
    country: str = Field(..., min_length=2, description="Country name")
    name: Optional[str] = Field(None, description="Recipient name, defaults to the customer name")
    phone: Optional[str] = Field(None, description="Contact number for this address")


class CartVariantInput(BaseModel):
    """Variant selected for a cart line."""

    model_config = _REQUEST_CONFIG

    id: Optional[int] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    price: Optional[Decimal] = Field(None, ge=0)
    weight: Optional[Decimal] = Field(None, ge=0)


class CartItemInput(BaseModel):
    """One cart line."""

    model_config = _REQUEST_CONFIG

    product_id: int = Field(
        ...,
        validation_alias=AliasChoices("product_id", "productId", "id"),
        description="Catalog product id",
    )
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    quantity: Optional[int] = Field(default=1, ge=1)
    price: Optional[Decimal] = Field(None, ge=0, description="Unit price in the base currency")
    price_foreign: Optional[Decimal] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("price_foreign", "priceForeign", "priceDollars"),
        description="Unit price for foreign-currency orders",
    )
    weight: Optional[Decimal] = Field(None, ge=0, description="Unit weight in grams")
    variant: Optional[CartVariantInput] = Field(
        None, validation_alias=AliasChoices("variant", "selectedVariant")
    )

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value):
        return 1 if value is None else value

    def to_domain(self) -> CartItem:
        variant = None
        if self.variant is not None:
            variant = CartVariant(
                id=self.variant.id,
                attributes=dict(self.variant.attributes),
                price=self.variant.price,
                weight=self.variant.weight,
            )
        return CartItem(
            product_id=self.product_id,
            quantity=self.quantity or 1,
            title=self.title,
            price=self.price,
            price_foreign=self.price_foreign,
            weight=self.weight,
            variant=variant,
        )


class PlaceOrderRequest(BaseModel):
    """Normalized checkout request."""

    model_config = _REQUEST_CONFIG

    # Identity
    account_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("account_id", "accountId", "userId"),
        description="Existing account id, if the customer is signed in",
    )
    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)
    email: str = Field(..., description="Customer email (merge key for guest orders)")
    phone: str = Field(..., min_length=10)
    create_account: bool = Field(default=False)
    password: Optional[str] = Field(None, description="Required (6+ chars) when create_account is set")
    newsletter_opt_in: bool = Field(
        default=False, validation_alias=AliasChoices("newsletter_opt_in", "newsletterOptIn", "newsletter")
    )

    # Addresses
    billing: AddressInput
    same_as_billing: bool = Field(default=True)
    shipping: Optional[AddressInput] = Field(None, description="Delivery address when it differs from billing")

    # Cart
    items: List[CartItemInput] = Field(..., min_length=1)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    shipping_method: Optional[str] = Field(default="standard", description="standard | express")
    payment_method: str = Field(..., description="card | upi | cod")

    # Client-side totals (checked, not trusted)
    subtotal: Optional[Decimal] = Field(None, ge=0)
    tax: Optional[Decimal] = Field(None, ge=0)
    delivery_charge: Optional[Decimal] = Field(
        None, ge=0, validation_alias=AliasChoices("delivery_charge", "deliveryCharge", "shippingCost")
    )
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    total: Optional[Decimal] = Field(None, ge=0)
    coupon_code: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("shipping_method")
    @classmethod
    def _check_shipping_method(cls, value: Optional[str]) -> Optional[str]:
        method = ShippingMethod.parse(value)
        return method.value if method else None

    @model_validator(mode="after")
    def _check_dependent_fields(self) -> "PlaceOrderRequest":
        if self.create_account and (not self.password or len(self.password) < 6):
            raise ValueError("Password must be at least 6 characters to create an account")
        if not self.same_as_billing and self.shipping is None:
            raise ValueError("Shipping address is required when it differs from billing")
        return self

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def shipping_method_enum(self) -> Optional[ShippingMethod]:
        return ShippingMethod.parse(self.shipping_method)

    def cart_items(self) -> List[CartItem]:
        return [item.to_domain() for item in self.items]


class VerifyPaymentRequest(BaseModel):
    """Payment verification callback from the checkout widget."""

    model_config = _REQUEST_CONFIG

    gateway_payment_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(
            "gateway_payment_id", "gatewayPaymentId", "razorpay_payment_id", "razorpayPaymentId"
        ),
    )
    gateway_order_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(
            "gateway_order_id", "gatewayOrderId", "razorpay_order_id", "razorpayOrderId"
        ),
    )
    signature: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("signature", "razorpay_signature", "razorpaySignature"),
    )


class StatusUpdateRequest(BaseModel):
    """Admin status change."""

    model_config = _REQUEST_CONFIG

    status: OrderStatus


class TrackingRequest(BaseModel):
    """Tracking information added by an admin."""

    model_config = _REQUEST_CONFIG

    tracking_id: str = Field(..., min_length=1)
    courier_name: Optional[str] = None
    tracking_url: Optional[str] = None
    status: Optional[ShippingStatus] = None
