"""Per-client fixed-window rate limiting backed by Redis."""

import logging
import time
from dataclasses import dataclass

import redis
from fastapi import Request

from src.config import get_settings
from src.exceptions import TooManyRequestsError

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class RateLimit:
    """A quota of ``max_requests`` per ``window_seconds`` for one scope."""

    scope: str
    max_requests: int
    window_seconds: int
    message: str


AUTH_LIMIT = RateLimit(
    scope="auth",
    max_requests=5,
    window_seconds=15 * 60,
    message="Too many authentication attempts, please try again in 15 minutes",
)
GENERAL_LIMIT = RateLimit(
    scope="general",
    max_requests=100,
    window_seconds=15 * 60,
    message="Too many requests, please try again later",
)
THOUGHT_CREATION_LIMIT = RateLimit(
    scope="thought_create",
    max_requests=5,
    window_seconds=60,
    message="Too many thoughts created, please wait a minute before posting again",
)


_redis: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Get the shared Redis client used for rate limit counters."""
    global _redis
    if _redis is None:
        _redis = redis.from_url(settings.redis_url)
    return _redis


def client_ip(request: Request) -> str:
    """Address to count requests against.

    X-Forwarded-For is only honoured when the direct peer is a trusted proxy.
    """
    peer = request.client.host if request.client else "unknown"
    trusted = settings.trusted_proxy_list
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and ("*" in trusted or peer in trusted):
        return forwarded.split(",")[0].strip()
    return peer


def hit(limit: RateLimit, identifier: str, now: float | None = None) -> int:
    """Count one request against the current window and return the new total."""
    now = time.time() if now is None else now
    window = int(now // limit.window_seconds)
    key = f"ratelimit:{limit.scope}:{identifier}:{window}"
    # SET NX EX and INCR run in one MULTI/EXEC, so every counter has a TTL
    pipe = get_redis().pipeline()
    pipe.set(key, 0, ex=limit.window_seconds, nx=True)
    pipe.incr(key)
    _, count = pipe.execute()
    return count


def rate_limiter(limit: RateLimit):
    """Build a FastAPI dependency enforcing ``limit`` per client IP."""

    def dependency(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return
        identifier = client_ip(request)
        try:
            count = hit(limit, identifier)
        except redis.RedisError as e:
            # Without a counter store, serve the request unthrottled
            logger.warning(f"Rate limit check skipped for {limit.scope}: {e}")
            return
        if count > limit.max_requests:
            logger.warning(f"Rate limit {limit.scope} exceeded by {identifier}")
            raise TooManyRequestsError(limit.message)

    return dependency


auth_rate_limit = rate_limiter(AUTH_LIMIT)
general_rate_limit = rate_limiter(GENERAL_LIMIT)
thought_creation_rate_limit = rate_limiter(THOUGHT_CREATION_LIMIT)
