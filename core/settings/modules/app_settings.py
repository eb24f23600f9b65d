from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from core.settings.modules.database_settings import DatabaseSettings
from core.settings.modules.engine_settings import EngineSettings
from core.settings.modules.llm_settings import LLMSettings
from core.settings.modules.rate_limit_settings import RateLimitSettings
from core.settings.modules.server_settings import ServerSettings
from core.settings.modules.store_settings import StoreSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    llm: LLMSettings = Field(default_factory=LLMSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
