"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Lifespan manages
startup/shutdown (Redis, the session sweeper, the database engine).
Middleware, CORS, error handlers and routers are all registered here.
"""

import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskledger import __version__
from taskledger.api import api_router
from taskledger.config import settings
from taskledger.errors import register_exception_handlers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    logger.info(
        "taskledger.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from taskledger.db.cache import close_redis, init_redis
    try:
        await init_redis()
        logger.info("taskledger.redis_connected", url=settings.redis_url)
    except Exception as e:
        logger.warning("taskledger.redis_unavailable", error=str(e))
        # Redis is optional — only rate limiting needs it

    from taskledger.services.session_sweeper import SessionSweeper
    sweeper = SessionSweeper()
    sweep_task = asyncio.create_task(sweeper.run_loop())

    yield

    logger.info("taskledger.shutdown")

    sweeper.stop()
    sweep_task.cancel()
    try:
        await sweep_task
    except asyncio.CancelledError:
        pass

    await close_redis()

    from taskledger.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="taskledger",
        description="Task and account tracking with cookie-session auth",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → UnhandledError → handler

    from taskledger.middleware.errors import UnhandledErrorMiddleware
    from taskledger.middleware.rate_limit import RateLimitMiddleware
    from taskledger.middleware.request_id import RequestIdMiddleware
    from taskledger.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: taskledger.main:app)
app = create_app()
