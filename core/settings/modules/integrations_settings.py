from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class SlackSettings(StorefrontBaseSettings):
    """
    Slack integration settings for operator alerts.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=False, alias="STOREFRONT_SLACK_ENABLED")
    webhook_url: str = Field(default="", alias="SLACK_WEBHOOK_URL")
    prefix: str = Field(default="[STOREFRONT ORDERS]", alias="STOREFRONT_SLACK_PREFIX")
    min_severity: int = Field(default=50, alias="STOREFRONT_SLACK_MIN_SEVERITY")
