"""
Rate limiting middleware.

Fixed-window counters per client key and tier. A key that goes over its
budget is blocked for the tier's block duration.
"""
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse

from core.settings.modules.rate_limit_settings import RateLimitSettings, RateLimitTier


logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    consumed: int = 0
    blocked_until: float = 0.0


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    """Fixed-window limiter with a block penalty."""

    def __init__(self, tier: RateLimitTier, clock: Callable[[], float] = time.monotonic):
        """
        Initialize limiter

        Args:
            tier: Budget (points per duration) and block duration
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.tier = tier
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._last_sweep = clock()

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def consume(self, key: str) -> RateLimitDecision:
        now = self._clock()
        if now - self._last_sweep >= self.tier.duration:
            self._sweep(now)
        window = self._windows.get(key)

        if window is not None and window.blocked_until > now:
            return self._reject(window.blocked_until - now)

        # An expired block starts a fresh window
        if window is None or window.blocked_until or now - window.started_at >= self.tier.duration:
            window = _Window(started_at=now)
            self._windows[key] = window

        window.consumed += 1
        if window.consumed > self.tier.points:
            window.blocked_until = now + self.tier.block_duration
            return self._reject(self.tier.block_duration)

        seconds_left = window.started_at + self.tier.duration - now
        return RateLimitDecision(
            allowed=True,
            limit=self.tier.points,
            remaining=self.tier.points - window.consumed,
            retry_after=max(1, math.ceil(seconds_left)),
        )

    def _sweep(self, now: float) -> None:
        """Drop windows whose duration and block have both passed."""
        expired = [
            key
            for key, window in self._windows.items()
            if window.blocked_until <= now and now - window.started_at >= self.tier.duration
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        if expired:
            logger.debug(f"Dropped {len(expired)} expired rate limit window(s)")

    def _reject(self, seconds: float) -> RateLimitDecision:
        return RateLimitDecision(
            allowed=False,
            limit=self.tier.points,
            remaining=0,
            retry_after=max(1, round(seconds)),
        )


def select_tier(path: str) -> str:
    """Pick the tier name for a request path."""
    if "/execute" in path or "/test" in path:
        return "execution"
    if "/auth" in path or "/login" in path:
        return "auth"
    return "general"


class RateLimitMiddleware:
    """HTTP middleware applying one limiter per tier."""

    def __init__(self, settings: RateLimitSettings, clock: Callable[[], float] = time.monotonic):
        self.settings = settings
        self.limiters: Dict[str, FixedWindowRateLimiter] = {
            "execution": FixedWindowRateLimiter(settings.execution, clock),
            "general": FixedWindowRateLimiter(settings.general, clock),
            "auth": FixedWindowRateLimiter(settings.auth, clock),
        }

    def check(self, key: str, path: str) -> Tuple[str, RateLimitDecision]:
        tier = select_tier(path)
        return tier, self.limiters[tier].consume(key)

    async def __call__(self, request: Request, call_next):
        if not self.settings.enabled:
            return await call_next(request)

        key = request.client.host if request.client else "unknown"
        tier, decision = self.check(key, request.url.path)

        if not decision.allowed:
            logger.warning(f"Rate limit exceeded for IP: {key}, endpoint: {request.url.path} ({tier})")
            return JSONResponse(
                status_code=429,
                headers={"Retry-After": str(decision.retry_after)},
                content={
                    "success": False,
                    "error": "Too Many Requests",
                    "message": f"Rate limit exceeded. Try again in {decision.retry_after} seconds.",
                    "retryAfter": decision.retry_after,
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
