from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class MailSettings(StorefrontBaseSettings):
    """
    Transactional mail settings (HTTP mail API).
    """

    enabled: bool = Field(default=False, alias="MAIL_ENABLED")
    api_url: str = Field(default="", alias="MAIL_API_URL")
    api_key: str = Field(default="", alias="MAIL_API_KEY")
    sender: str = Field(default="orders@example.com", alias="MAIL_SENDER")
    pool_size: int = Field(default=10, alias="MAIL_POOL_SIZE")
    timeout_seconds: float = Field(default=10.0, alias="MAIL_TIMEOUT_SECONDS")
