from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import PlatformBaseSettings


class EngineSettings(PlatformBaseSettings):
    """Artificial delays standing in for external calls (seconds)."""

    integration_delay: float = Field(default=1.0, alias="ENGINE_INTEGRATION_DELAY_SECONDS")
    ai_step_delay: float = Field(default=2.0, alias="ENGINE_AI_STEP_DELAY_SECONDS")
    integration_step_delay: float = Field(default=1.5, alias="ENGINE_INTEGRATION_STEP_DELAY_SECONDS")
    wait_step_delay: float = Field(default=5.0, alias="ENGINE_WAIT_STEP_DELAY_SECONDS")
    inter_step_delay: float = Field(default=1.0, alias="ENGINE_INTER_STEP_DELAY_SECONDS")
