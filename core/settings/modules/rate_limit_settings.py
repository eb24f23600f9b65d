from __future__ import annotations

from pydantic import BaseModel, Field

from core.settings.base_settings import PlatformBaseSettings


class RateLimitTier(BaseModel):
    """Fixed-window budget: ``points`` requests per ``duration`` seconds."""

    points: int
    duration: int
    block_duration: int


class RateLimitSettings(PlatformBaseSettings):
    """
    Rate limiting settings.

    Tier budgets mirror the public API contract and are not env-driven.
    """

    enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    execution: RateLimitTier = RateLimitTier(points=10, duration=60, block_duration=60)
    general: RateLimitTier = RateLimitTier(points=100, duration=60, block_duration=30)
    auth: RateLimitTier = RateLimitTier(points=5, duration=60, block_duration=300)
