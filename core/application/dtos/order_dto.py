"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.domain.entities.account import Account, Address
from core.domain.entities.order import Order, OrderLineItem, ShippingDetail


class LineItemDTO(BaseModel):
    """DTO for order line item."""

    id: Optional[int] = Field(None, description="Line item id")
    product_id: int = Field(..., description="Catalog product id")
    variant_id: Optional[int] = Field(None, description="Variant id")
    title: str = Field(default="", description="Product title at purchase time")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price snapshot")
    total: Decimal = Field(..., ge=0, description="unit_price x quantity")
    variation: Optional[Dict[str, Any]] = Field(None, description="Variant snapshot")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, item: OrderLineItem) -> "LineItemDTO":
        return cls(
            id=item.id,
            product_id=item.product_id,
            variant_id=item.variant_id,
            title=item.title,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            total=item.total.amount,
            variation=item.variation,
        )


class ShippingDetailDTO(BaseModel):
    """DTO for the order's shipment."""

    courier_name: str
    tracking_id: str
    tracking_url: Optional[str] = None
    status: str
    shipping_date: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, detail: ShippingDetail) -> "ShippingDetailDTO":
        return cls(
            courier_name=detail.courier_name,
            tracking_id=detail.tracking_id,
            tracking_url=detail.tracking_url,
            status=detail.status.value,
            shipping_date=detail.shipping_date,
        )


class AccountContactDTO(BaseModel):
    """Contact information of the owning account."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, account: Account) -> "AccountContactDTO":
        return cls(id=account.id, name=account.name, email=account.email, phone=account.phone)


class AddressDTO(BaseModel):
    """Recorded address with resolved country and region names."""

    id: int
    kind: str
    name: str
    line1: str
    line2: Optional[str] = None
    city: str
    postal_code: str
    phone: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, address: Address) -> "AddressDTO":
        return cls(
            id=address.id,
            kind=address.kind.value,
            name=address.name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            postal_code=address.postal_code,
            phone=address.phone,
            region=address.region_name,
            country=address.country_name,
        )


class OrderDTO(BaseModel):
    """Response DTO for an order header with its lines and shipment."""

    id: int = Field(..., description="Order id")
    order_number: str = Field(..., description="Display number, e.g. ORD-0001")
    account_id: int = Field(..., description="Owning account")
    placed_at: datetime = Field(..., description="Creation timestamp (UTC)")
    currency: str = Field(..., description="Currency code")
    subtotal: Decimal = Field(..., description="Sum of line totals before tax")
    tax_amount: Decimal
    delivery_charge: Decimal
    discount_amount: Decimal
    total: Decimal = Field(..., description="subtotal + tax + delivery - discount")
    payment_method: str
    payment_status: str
    order_status: str
    coupon_code: Optional[str] = None
    notes: Optional[str] = None
    gateway_order_id: Optional[str] = None
    items: List[LineItemDTO] = Field(default_factory=list)
    shipping: Optional[ShippingDetailDTO] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            order_number=str(order.order_number),
            account_id=order.account_id,
            placed_at=order.placed_at,
            currency=order.currency,
            subtotal=order.subtotal,
            tax_amount=order.tax_amount,
            delivery_charge=order.delivery_charge,
            discount_amount=order.discount_amount,
            total=order.total,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            order_status=order.order_status.value,
            coupon_code=order.coupon_code,
            notes=order.notes,
            gateway_order_id=order.gateway_order_id,
            items=[LineItemDTO.from_domain(item) for item in order.items],
            shipping=(
                ShippingDetailDTO.from_domain(order.shipping_detail)
                if order.shipping_detail else None
            ),
        )


class PlacedOrderDTO(BaseModel):
    """Result of a successful checkout."""

    order: OrderDTO
    account: AccountContactDTO
    account_created: bool = Field(..., description="True when checkout created the account")
    requires_payment: bool = Field(..., description="True when the gateway must be used")
    confirmation_sent: bool = Field(..., description="Confirmation email accepted by the provider")
    session_token: Optional[str] = Field(
        None, exclude=True, description="Signed session token (set as cookie, never in the body)"
    )

    model_config = {"frozen": True}


class PaymentIntentDTO(BaseModel):
    """Gateway order the client uses to open the payment UI."""

    order_id: int
    gateway_order_id: str
    amount: int = Field(..., gt=0, description="Amount in minor units (paise)")
    currency: str
    key_id: Optional[str] = Field(None, description="Public gateway key for the checkout widget")

    model_config = {"frozen": True}


class PaymentVerificationDTO(BaseModel):
    """Outcome of a payment verification."""

    order_id: int
    verified: bool
    already_verified: bool = False
    payment_status: str
    confirmation_sent: bool = False

    model_config = {"frozen": True}


class StatusChangeDTO(BaseModel):
    """Outcome of a status transition or tracking update."""

    order: OrderDTO
    previous_status: str
    changed: bool
    notification_sent: bool = False

    model_config = {"frozen": True}


class OrderDetailDTO(BaseModel):
    """Full order view for admin pages, tracking and invoices."""

    order: OrderDTO
    customer: AccountContactDTO
    billing_address: Optional[AddressDTO] = None
    delivery_address: Optional[AddressDTO] = None

    model_config = {"frozen": True}


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Total count")
    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)

    model_config = {"frozen": True}


class InvoiceResultDTO(BaseModel):
    order_id: int
    invoice_number: str
    recipient: str
    sent: bool

    model_config = {"frozen": True}
