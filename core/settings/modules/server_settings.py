from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import PlatformBaseSettings


class ServerSettings(PlatformBaseSettings):
    """HTTP server settings."""

    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")
    environment: str = Field(default="development", alias="APP_ENV")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"
