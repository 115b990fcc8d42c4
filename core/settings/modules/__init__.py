# Settings modules
from .app_settings import AppSettings, IntegrationsSettings, build_app_settings, get_app_settings
from .auth_settings import AuthSettings
from .checkout_settings import CheckoutSettings, ShippingSettings
from .integrations_settings import SlackSettings
from .mail_settings import MailSettings
from .payment_settings import RazorpaySettings

__all__ = [
    "AppSettings",
    "AuthSettings",
    "build_app_settings",
    "CheckoutSettings",
    "get_app_settings",
    "IntegrationsSettings",
    "MailSettings",
    "RazorpaySettings",
    "ShippingSettings",
    "SlackSettings",
]
