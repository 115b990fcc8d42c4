from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.domain.services.shipping import ShippingTariff
from core.settings.modules.auth_settings import AuthSettings
from core.settings.modules.checkout_settings import CheckoutSettings, ShippingSettings
from core.settings.modules.integrations_settings import SlackSettings
from core.settings.modules.mail_settings import MailSettings
from core.settings.modules.payment_settings import RazorpaySettings


class IntegrationsSettings(BaseModel):
    """Aggregates integrations settings as nested objects."""

    model_config = ConfigDict(extra="ignore")

    slack: SlackSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    checkout: CheckoutSettings
    shipping: ShippingSettings
    razorpay: RazorpaySettings
    mail: MailSettings
    auth: AuthSettings
    integrations: IntegrationsSettings

    @property
    def slack(self) -> SlackSettings:
        return self.integrations.slack

    @property
    def tariff(self) -> ShippingTariff:
        return self.shipping.to_tariff(self.checkout.base_currency)


def build_app_settings(**overrides) -> AppSettings:
    """Build settings from the environment, replacing whole sections by keyword."""
    sections = {
        "checkout": CheckoutSettings(),
        "shipping": ShippingSettings(),
        "razorpay": RazorpaySettings(),
        "mail": MailSettings(),
        "auth": AuthSettings(),
        "integrations": IntegrationsSettings(slack=SlackSettings()),
    }
    sections.update(overrides)
    return AppSettings(**sections)


@lru_cache()
def get_app_settings() -> AppSettings:
    return build_app_settings()
