from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class RazorpaySettings(StorefrontBaseSettings):
    """
    Razorpay gateway settings.
    Disabled gateways fall back to the in-process mock gateway.
    """

    enabled: bool = Field(default=False, alias="RAZORPAY_ENABLED")
    key_id: str = Field(default="", alias="RAZORPAY_KEY_ID")
    key_secret: str = Field(default="", alias="RAZORPAY_KEY_SECRET")
    api_base: str = Field(default="https://api.razorpay.com/v1", alias="RAZORPAY_API_BASE")
    timeout_seconds: float = Field(default=10.0, alias="RAZORPAY_TIMEOUT_SECONDS")
