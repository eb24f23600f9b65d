from .rate_limiter import FixedWindowRateLimiter, RateLimitDecision, RateLimitMiddleware, select_tier

__all__ = ["FixedWindowRateLimiter", "RateLimitDecision", "RateLimitMiddleware", "select_tier"]
