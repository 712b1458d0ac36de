"""Health check endpoint.

Simple GET endpoint that verifies the server is running and
dependencies (database, Redis) are reachable.
"""

from fastapi import APIRouter
from sqlalchemy import text

from taskledger import __version__
from taskledger.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    # Redis only backs rate limiting, so it's reported but not required
    try:
        from redis.asyncio import from_url
        from taskledger.config import settings

        r = from_url(settings.redis_url)
        await r.ping()
        await r.aclose()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
