"""
Rate limit middleware: Redis sliding window on generation endpoints, keyed by X-User-ID.
RATE_LIMIT_PER_MIN requests per minute per user. Without REDIS_URL it is a no-op.
"""
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware

from content_studio.config import Settings, get_settings
from content_studio.deps import HEADER_USER_ID
from content_studio.logging_config import get_logger

logger = get_logger(__name__)

REDIS_KEY_PREFIX = "rl:"
WINDOW_SECONDS = 60


def is_generation_request(request: Request) -> bool:
    """Calls that reach the generation webhook."""
    if request.method != "POST":
        return False
    path = request.url.path.rstrip("/")
    return path.endswith("/generate") or path in ("/api/brands/autofill", "/api/n8n")


def _rate_limit_key(request: Request) -> Optional[str]:
    user = request.headers.get(HEADER_USER_ID, "").strip()
    if user:
        return f"user:{user[:64]}"
    return None


async def _check_sliding_window(redis_url: str, key: str, limit: int) -> bool:
    """
    Sliding window: ZADD now, ZREMRANGEBYSCORE -inf (now-60), ZCARD.
    True when the request is within the limit. Redis errors let the request through.
    """
    now = time.time()
    rkey = REDIS_KEY_PREFIX + key
    client = Redis.from_url(redis_url, decode_responses=True)
    try:
        pipe = client.pipeline()
        pipe.zadd(rkey, {str(uuid.uuid4()): now})
        pipe.zremrangebyscore(rkey, "-inf", now - WINDOW_SECONDS)
        pipe.zcard(rkey)
        pipe.expire(rkey, WINDOW_SECONDS + 10)
        results = await pipe.execute()
        return results[2] <= limit
    except (RedisError, OSError) as e:
        logger.warning("rate_limit.redis_error", key=key, error=str(e))
        return True
    finally:
        await client.aclose()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-user limit on generation calls (Redis sliding window)."""

    def _settings(self, request: Request) -> Settings:
        ctx = getattr(request.app.state, "context", None)
        return ctx.settings if ctx is not None else get_settings()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not is_generation_request(request):
            return await call_next(request)
        settings = self._settings(request)
        if not settings.redis_url:
            return await call_next(request)
        key = _rate_limit_key(request)
        if not key:
            return await call_next(request)
        limit = settings.rate_limit_per_min
        allowed = await _check_sliding_window(settings.redis_url, key, limit)
        if not allowed:
            logger.info("rate_limit.exceeded", key=key, limit=limit)
            return Response(
                content='{"detail":"Rate limit exceeded for generation requests.","code":"rate_limited"}',
                status_code=429,
                media_type="application/json",
            )
        return await call_next(request)
