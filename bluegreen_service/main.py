"""
Blue/Green Pool Service - FastAPI Application

Main entry point. Builds the app from explicit settings and serves it with
uvicorn; SIGTERM/SIGINT are handled by uvicorn's graceful shutdown.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from bluegreen_service import __version__
from bluegreen_service.api.chaos_routes import router as chaos_router
from bluegreen_service.api.handlers import register_exception_handlers
from bluegreen_service.api.identity_routes import router as identity_router
from bluegreen_service.api.middleware import IdentityHeadersMiddleware
from bluegreen_service.chaos import ChaosState
from bluegreen_service.config import Settings, get_settings
from bluegreen_service.logging import get_logger, setup_logging

logger = get_logger(__name__)


# =============================================================================
# Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings

    logger.info("Blue/Green Deployment Service v%s", __version__)
    logger.info("Pool: %s | Release ID: %s", settings.pool, settings.release_id)
    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    if settings.chaos_max_hang_s is not None:
        logger.info("Simulated timeouts bounded to %.1fs", settings.chaos_max_hang_s)

    yield

    logger.info(
        "Shutting down (chaos state at exit: %s)",
        app.state.chaos.get_state(),
    )


# =============================================================================
# FastAPI Application
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build an application instance.

    Each instance owns its own ChaosState, so tests and embedded servers
    never share chaos mode.

    Args:
        settings: Service settings (defaults to the cached environment settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Blue/Green Pool Service",
        description="Identity/health fixture with operator-triggered chaos mode",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.chaos = ChaosState()

    app.add_middleware(
        IdentityHeadersMiddleware,
        pool=settings.pool,
        release_id=settings.release_id,
    )
    register_exception_handlers(app)

    app.include_router(identity_router)
    app.include_router(chaos_router)

    return app


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Run the server."""
    import uvicorn

    settings = get_settings()
    setup_logging(level=settings.log_level, json_output=settings.log_json, pool=settings.pool)
    logger.info("Configuration: %s", settings.get_redacted_config())

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
        limit_concurrency=settings.max_connections,
        timeout_graceful_shutdown=settings.shutdown_grace_s,
    )


if __name__ == "__main__":
    main()
