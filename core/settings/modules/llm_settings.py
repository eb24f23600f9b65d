from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import PlatformBaseSettings


class LLMSettings(PlatformBaseSettings):
    """
    Text-generation API settings.

    An empty api key switches think/plan/execute steps to mock mode.
    """

    api_key: str = Field(default="", alias="OPENAI_API_KEY")
    base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    model: str = Field(default="gpt-4", alias="OPENAI_MODEL")
    timeout_seconds: float = Field(default=60.0, alias="OPENAI_TIMEOUT_SECONDS")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.api_key.strip())
