# Settings package
from core.settings.modules import AppSettings, build_app_settings, get_app_settings

__all__ = ["AppSettings", "build_app_settings", "get_app_settings"]
