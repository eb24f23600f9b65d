"""Shared fakes and fixtures."""

import pytest

from core.application.interfaces import ITextGenerator
from core.settings import EngineSettings


class FakeTextGenerator(ITextGenerator):
    """Fake text generator recording every call.

    Set ``error`` to make every call raise it.
    """

    def __init__(self, reply: str = "Generated text", available: bool = True) -> None:
        self.reply = reply
        self.error: Exception | None = None
        self._available = available
        self.calls: list[dict] = []

    @property
    def available(self) -> bool:
        return self._available

    async def generate(self, system_prompt, user_prompt, max_tokens, temperature=None) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


class FakeEventBus:
    """Fake EventBus for testing."""

    def __init__(self) -> None:
        self.events: list = []

    async def publish(self, event) -> None:
        self.events.append(event)

    def subscribe(self, event_name, handler) -> None:
        pass

    def names(self) -> list[str]:
        return [event.name for event in self.events]


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def unconfigured_generator() -> FakeTextGenerator:
    """Generator without a credential (mock mode)."""
    return FakeTextGenerator(available=False)


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def engine_settings() -> EngineSettings:
    """Engine settings with every artificial delay disabled."""
    return EngineSettings(
        integration_delay=0,
        ai_step_delay=0,
        integration_step_delay=0,
        wait_step_delay=0,
        inter_step_delay=0,
    )
