"""Main FastAPI application entry point.

Run with:
    uvicorn account_recovery.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from account_recovery.core.config import get_settings
from account_recovery.core.container import get_database, get_logger
from account_recovery.presentation.routers import (
    password_reset_tokens_router,
    password_resets_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and dispose the connection pool on shutdown."""
    settings = get_settings()
    get_logger().info(
        "Application starting",
        environment=settings.environment.value,
        email_backend=settings.email_backend,
    )

    yield

    await get_database().close()


def create_app() -> FastAPI:
    """Build the FastAPI application from current settings."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Password recovery for the ticket logger administration webapp",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    v1_router = APIRouter(prefix=settings.api_v1_prefix)
    v1_router.include_router(password_reset_tokens_router)
    v1_router.include_router(password_resets_router)
    app.include_router(v1_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    return app


app = create_app()
