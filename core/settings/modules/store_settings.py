from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import PlatformBaseSettings


class StoreSettings(PlatformBaseSettings):
    """In-memory execution store retention."""

    ttl_seconds: float = Field(default=86_400, alias="EXECUTION_TTL_SECONDS")
    max_entries: int = Field(default=10_000, alias="EXECUTION_STORE_MAX_ENTRIES")
