"""
OpenAI Chat Completions client.

Wraps the async OpenAI SDK. When no API key is configured the client
reports itself unavailable and callers switch to mock output.
"""
import logging
from typing import Any, Dict, Optional

import httpx
import openai

from core.application.interfaces import ITextGenerator
from core.domain.exceptions import TextGenerationError
from core.settings.modules.llm_settings import LLMSettings


logger = logging.getLogger(__name__)


class OpenAIChatClient(ITextGenerator):
    """OpenAI SDK implementation of the text-generation collaborator."""

    def __init__(self, settings: LLMSettings, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the client.

        Args:
            settings: LLM settings with api key, base url and model
            http_client: Optional transport handed to the SDK (tests, proxies)
        """
        self.settings = settings
        self.model = settings.model
        self.async_client: Optional[openai.AsyncOpenAI] = None
        if self.available:
            self.async_client = openai.AsyncOpenAI(
                api_key=settings.api_key.strip(),
                base_url=settings.base_url,
                timeout=settings.timeout_seconds,
                http_client=http_client,
            )
            logger.info(f"OpenAI client initialized (model: {self.model})")
        else:
            logger.warning("OpenAI API key not found - AI features will be limited")

    @property
    def available(self) -> bool:
        return self.settings.enabled

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: Optional[float] = None,
    ) -> str:
        if self.async_client is None:
            raise TextGenerationError("OpenAI API key not configured")

        options: Dict[str, Any] = {"max_tokens": max_tokens}
        if temperature is not None:
            options["temperature"] = temperature

        try:
            completion = await self.async_client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **options,
            )
        except openai.APIStatusError as exc:
            message = _error_message(exc)
            logger.error(f"OpenAI API error: {exc.status_code} - {message}")
            raise TextGenerationError(f"OpenAI API error: {exc.status_code} - {message}") from exc
        except openai.OpenAIError as exc:
            logger.error(f"OpenAI request failed: {exc}", exc_info=True)
            raise TextGenerationError(f"OpenAI request failed: {exc}") from exc

        if not completion.choices:
            raise TextGenerationError("OpenAI API returned no completion choices")
        return completion.choices[0].message.content or ""


def _error_message(exc: openai.APIStatusError) -> str:
    body = exc.body
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str):
            return message
    return exc.message
