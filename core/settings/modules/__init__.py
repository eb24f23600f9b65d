# Settings modules
from .app_settings import AppSettings, get_app_settings
from .database_settings import DatabaseSettings
from .engine_settings import EngineSettings
from .llm_settings import LLMSettings
from .rate_limit_settings import RateLimitSettings, RateLimitTier
from .server_settings import ServerSettings
from .store_settings import StoreSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "DatabaseSettings",
    "EngineSettings",
    "LLMSettings",
    "RateLimitSettings",
    "RateLimitTier",
    "ServerSettings",
    "StoreSettings",
]
