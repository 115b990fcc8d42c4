# core/settings/base_settings.py
from pydantic_settings import BaseSettings


class StorefrontBaseSettings(BaseSettings):
    """
    Base for every settings section.

    Fields declare their exact environment variable name as alias; the
    python field name is accepted too so sections can be built in tests.
    """

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
