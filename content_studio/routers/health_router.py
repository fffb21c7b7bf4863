"""Health: /health (liveness), /api/readyz (store + Redis readiness)."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from content_studio.context import AppContext
from content_studio.deps import get_context
from content_studio.logging_config import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancer / Docker."""
    return {"status": "ok"}


@router.get("/api/readyz")
async def readyz(ctx: AppContext = Depends(get_context)):
    """Readiness: database and Redis (when configured) answer. 503 otherwise."""
    try:
        async with ctx.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("readyz.db_fail", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unhealthy", "db": "fail"})

    redis_state = "skipped"
    if ctx.settings.redis_url:
        from redis.asyncio import Redis

        client = Redis.from_url(ctx.settings.redis_url, decode_responses=True)
        try:
            await client.ping()
            redis_state = "ok"
        except Exception as e:
            logger.warning("readyz.redis_fail", error=str(e))
            return JSONResponse(status_code=503, content={"status": "unhealthy", "redis": "fail"})
        finally:
            await client.aclose()

    return {
        "status": "ok",
        "db": "ok",
        "redis": redis_state,
        "generation": "mock" if ctx.gateway.is_mock else "n8n",
    }
