"""
Razorpay Payment Gateway Implementation.

Creates remote orders over the Razorpay REST API and verifies checkout
signatures locally with the key secret.
"""
from typing import Any, Dict, Optional
import asyncio
import logging

import aiohttp

from core.application.interfaces import GatewayOrder, IPaymentGateway
from core.domain.exceptions import PaymentGatewayError, PaymentGatewayUnavailableError
from core.infrastructure.security import signature_matches
from core.settings.modules.payment_settings import RazorpaySettings


logger = logging.getLogger(__name__)


class RazorpayGateway(IPaymentGateway):
    """
    Razorpay implementation of the payment gateway.

    Calls are not retried: an unreachable gateway surfaces as
    PaymentGatewayUnavailableError and the caller decides.
    """

    def __init__(
        self,
        settings: RazorpaySettings,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize Razorpay gateway.

        Args:
            settings: Razorpay credentials and endpoint
            session: Shared aiohttp session; one is created lazily when omitted
        """
        self.settings = settings
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        logger.info("RazorpayGateway initialized")

    @property
    def key_id(self) -> Optional[str]:
        return self.settings.key_id or None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        """
        Create a Razorpay order.

        Args:
            amount_minor: Amount in paise/cents, must be positive
            currency: ISO currency code
            receipt: Merchant receipt reference
            notes: Metadata stored on the Razorpay order

        Returns:
            GatewayOrder with the Razorpay order id

        Raises:
            PaymentGatewayError: Invalid amount or 4xx from Razorpay
            PaymentGatewayUnavailableError: Timeout, connection error or 5xx
        """
        if amount_minor <= 0:
            raise PaymentGatewayError(f"Amount must be positive, got: {amount_minor}")

        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
            "notes": notes or {},
        }
        url = f"{self.settings.api_base.rstrip('/')}/orders"

        try:
            async with self._get_session().post(
                url,
                json=payload,
                auth=aiohttp.BasicAuth(self.settings.key_id, self.settings.key_secret),
                timeout=self._timeout,
            ) as response:
                if response.status >= 500:
                    error_text = await response.text()
                    raise PaymentGatewayUnavailableError(
                        f"Razorpay unavailable: {response.status} - {error_text}"
                    )
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"❌ Razorpay rejected order: {response.status} - {error_text}")
                    raise PaymentGatewayError(
                        f"Razorpay rejected order: {error_text}",
                        status_code=response.status,
                    )
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ Razorpay request failed: {e!r}")
            raise PaymentGatewayUnavailableError(f"Razorpay request failed: {e!r}") from e

        logger.info(f"✅ Razorpay order created: {data.get('id')} ({amount_minor} {currency})")
        return GatewayOrder(
            id=data["id"],
            amount=int(data.get("amount", amount_minor)),
            currency=data.get("currency", currency),
            receipt=data.get("receipt", receipt),
            status=data.get("status", "created"),
            raw=data,
        )

    def verify_signature(self, payload: str, signature: str) -> bool:
        """HMAC-SHA256 of payload under the key secret, constant-time compare."""
        return signature_matches(self.settings.key_secret, payload, signature)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
