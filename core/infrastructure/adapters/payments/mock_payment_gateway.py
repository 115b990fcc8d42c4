"""
Mock Payment Gateway Implementation.

In-process stand-in for the payment provider, used when the real gateway is
disabled and in tests. Signatures are real HMACs under a local secret, so
sign() produces what the provider would send to the client.
"""
from typing import Any, Dict, List, Optional
import logging
import uuid

from core.application.interfaces import GatewayOrder, IPaymentGateway
from core.domain.exceptions import PaymentGatewayError, PaymentGatewayUnavailableError
from core.infrastructure.security import hmac_sha256_hex, signature_matches


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """
    Mock implementation of the payment gateway.

    Records created orders. Set `unavailable = True` to simulate an outage.
    """

    def __init__(self, secret: str = "mock_secret", key_id: str = "rzp_test_mock"):
        """Initialize mock gateway."""
        self._secret = secret
        self._key_id = key_id
        self.orders_created: List[GatewayOrder] = []
        self.unavailable = False
        logger.info("MockPaymentGateway initialized (no remote calls)")

    @property
    def key_id(self) -> Optional[str]:
        return self._key_id

    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        if self.unavailable:
            raise PaymentGatewayUnavailableError("Mock gateway timed out")
        if amount_minor <= 0:
            raise PaymentGatewayError(f"Amount must be positive, got: {amount_minor}")

        order = GatewayOrder(
            id=f"order_{uuid.uuid4().hex[:14]}",
            amount=amount_minor,
            currency=currency,
            receipt=receipt,
            raw={"notes": notes or {}},
        )
        self.orders_created.append(order)
        logger.info(f"✅ Mock gateway order created: {order.id} ({amount_minor} {currency})")
        return order

    def verify_signature(self, payload: str, signature: str) -> bool:
        return signature_matches(self._secret, payload, signature)

    def sign(self, gateway_order_id: str, gateway_payment_id: str) -> str:
        """Signature the provider would hand back after a successful payment."""
        return hmac_sha256_hex(self._secret, f"{gateway_order_id}|{gateway_payment_id}")
