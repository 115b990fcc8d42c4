"""Application DTOs."""

from .checkout_dto import (
    AddressInput,
    CartItemInput,
    CartVariantInput,
    PlaceOrderRequest,
    StatusUpdateRequest,
    TrackingRequest,
    VerifyPaymentRequest,
)
from .order_dto import (
    AccountContactDTO,
    AddressDTO,
    InvoiceResultDTO,
    LineItemDTO,
    OrderDetailDTO,
    OrderDTO,
    OrderListDTO,
    PaymentIntentDTO,
    PaymentVerificationDTO,
    PlacedOrderDTO,
    ShippingDetailDTO,
    StatusChangeDTO,
)

__all__ = [
    "AccountContactDTO",
    "AddressDTO",
    "AddressInput",
    "CartItemInput",
    "CartVariantInput",
    "InvoiceResultDTO",
    "LineItemDTO",
    "OrderDetailDTO",
    "OrderDTO",
    "OrderListDTO",
    "PaymentIntentDTO",
    "PaymentVerificationDTO",
    "PlacedOrderDTO",
    "PlaceOrderRequest",
    "ShippingDetailDTO",
    "StatusChangeDTO",
    "StatusUpdateRequest",
    "TrackingRequest",
    "VerifyPaymentRequest",
]
