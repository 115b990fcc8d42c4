"""Application services."""
from .address_recorder import AddressRecorder, RecordedAddresses
from .checkout_service import CheckoutService
from .fulfilment_service import OrderStatusService
from .identity_resolver import IdentityResolver, ResolvedIdentity
from .notification_dispatcher import NotificationDispatcher
from .order_service import OrderApplicationService
from .payment_service import PaymentService

__all__ = [
    "AddressRecorder",
    "CheckoutService",
    "IdentityResolver",
    "NotificationDispatcher",
    "OrderApplicationService",
    "OrderStatusService",
    "PaymentService",
    "RecordedAddresses",
    "ResolvedIdentity",
]
