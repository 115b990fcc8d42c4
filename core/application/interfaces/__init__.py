"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class NotificationTemplate(str, Enum):
    """Transactional email templates known to the mail provider."""

    ORDER_CONFIRMATION = "order_confirmation"
    PAYMENT_CONFIRMATION = "payment_confirmation"
    STATUS_UPDATE = "order_status_update"
    INVOICE = "order_invoice"


class INotificationService(ABC):
    """
    Interface for customer-facing notifications.

    Implementations deliver a named template with its data to one recipient
    (email transport, mock, ...).
    """

    @abstractmethod
    async def send(
        self,
        template: NotificationTemplate,
        recipient: str,
        data: Dict[str, Any],
    ) -> bool:
        """
        Send one templated notification.

        Args:
            template: Template name
            recipient: Recipient address
            data: Template variables (JSON serializable)

        Returns:
            True if the provider accepted the message
        """
        pass

    async def close(self) -> None:
        """Release pooled resources (default: nothing to release)."""
        return None


class IOperatorAlertService(ABC):
    """Interface for alerts that need an operator (Slack, mock)."""

    @abstractmethod
    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic alert message.

        Args:
            message: Alert text
            severity: Severity level (0-100, higher = more critical)
        """
        pass


@dataclass(frozen=True)
class GatewayOrder:
    """Remote payment order created before the customer pays."""

    id: str
    amount: int
    currency: str
    receipt: str
    status: str = "created"
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


class IPaymentGateway(ABC):
    """
    Interface for the external payment provider.

    The pipeline only needs order creation and signature verification.
    """

    @property
    @abstractmethod
    def key_id(self) -> Optional[str]:
        """Public key handed to the client-side checkout widget."""
        pass

    @abstractmethod
    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        """
        Create a remote payment order.

        Args:
            amount_minor: Amount in the smallest currency unit (paise)
            currency: ISO currency code
            receipt: Merchant receipt reference
            notes: Free-form metadata stored with the remote order

        Returns:
            GatewayOrder

        Raises:
            PaymentGatewayUnavailableError: Gateway unreachable or timed out
            PaymentGatewayError: Gateway rejected the request
        """
        pass

    @abstractmethod
    def verify_signature(self, payload: str, signature: str) -> bool:
        """
        Check that `signature` is the gateway's HMAC of `payload`.

        Args:
            payload: "<gateway_order_id>|<gateway_payment_id>"
            signature: Hex digest sent by the client

        Returns:
            True if authentic
        """
        pass

    async def close(self) -> None:
        """Release pooled resources (default: nothing to release)."""
        return None


__all__ = [
    "GatewayOrder",
    "INotificationService",
    "IOperatorAlertService",
    "IPaymentGateway",
    "NotificationTemplate",
]
