"""Application layer - services, DTOs and interfaces."""

from .dtos import OrderDTO, PlacedOrderDTO, PlaceOrderRequest
from .interfaces import (
    INotificationService,
    IOperatorAlertService,
    IPaymentGateway,
    NotificationTemplate,
)
from .services import (
    CheckoutService,
    OrderApplicationService,
    OrderStatusService,
    PaymentService,
)

__all__ = [
    # DTOs
    "OrderDTO",
    "PlacedOrderDTO",
    "PlaceOrderRequest",
    # Services
    "CheckoutService",
    "OrderApplicationService",
    "OrderStatusService",
    "PaymentService",
    # Interfaces
    "INotificationService",
    "IOperatorAlertService",
    "IPaymentGateway",
    "NotificationTemplate",
]
