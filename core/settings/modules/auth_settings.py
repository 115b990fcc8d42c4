from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class AuthSettings(StorefrontBaseSettings):
    """
    Account credential and session token settings.
    """

    session_secret: str = Field(default="change-me", alias="SESSION_SECRET")
    session_ttl_days: int = Field(default=30, alias="SESSION_TTL_DAYS")
    cookie_name: str = Field(default="userToken", alias="SESSION_COOKIE_NAME")
    cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")
    password_iterations: int = Field(default=240_000, alias="PASSWORD_HASH_ITERATIONS")
