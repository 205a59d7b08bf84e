"""FastAPI application factory and configuration."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from subtrans.api.v1 import api_router
from subtrans.core.config import get_settings
from subtrans.core.logging import setup_logging
from subtrans.core.middleware import setup_middleware

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info("Application startup: %s v%s", settings.app_name, settings.app_version)

    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set - translation requests will be rejected with 503")
    if not settings.api_key:
        logger.warning("API_KEY is not set - authentication is disabled")

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Setup middleware (CORS, auth, etc.)
    setup_middleware(app, settings)

    # Include API routes with versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "subtrans.main:app",
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        reload=False,
    )
