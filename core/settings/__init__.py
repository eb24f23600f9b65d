# Settings package
from core.settings.modules import (
    AppSettings,
    DatabaseSettings,
    EngineSettings,
    LLMSettings,
    RateLimitSettings,
    ServerSettings,
    StoreSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "DatabaseSettings",
    "EngineSettings",
    "LLMSettings",
    "RateLimitSettings",
    "ServerSettings",
    "StoreSettings",
]
