"""
Racing Bar API - Main FastAPI Application.

Provides endpoints for:
- Aggregated monthly OpenRank series of a repository
- Per-month racing bar chart configurations
"""

import os
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from openrank_racing import __version__
from openrank_racing.api.dependencies import cleanup_async
from openrank_racing.api.middleware import RequestLoggingMiddleware
from openrank_racing.api.routes import racing_bar_router
from openrank_racing.api.schemas import HealthResponse, ErrorResponse
from openrank_racing.config.settings import get_settings
from openrank_racing.core.errors import InvalidConfig
from openrank_racing.utils.logger_config import setup_logging

logger = logging.getLogger(__name__)


API_VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, format_string=settings.log_format)
    logger.info(f"Starting Racing Bar API (feed: {settings.openrank_base_url})")

    yield

    logger.info("Shutting down Racing Bar API...")
    await cleanup_async()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="OpenRank Racing Bar API",
        description="Monthly OpenRank rankings and racing bar chart configurations.",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins.split(","),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(racing_bar_router)

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["health"]
    )
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.exception_handler(InvalidConfig)
    async def invalid_config_handler(request: Request, exc: InvalidConfig):
        """Reject out-of-range options and malformed periods."""
        logger.info(f"Rejected {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Invalid configuration",
                detail=str(exc),
                code="INVALID_CONFIG",
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if os.getenv("DEBUG") else None,
                "code": "INTERNAL_ERROR"
            }
        )

    return app


app = create_app()


# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    host = os.getenv("API_HOST", "127.0.0.1")
    port = int(os.getenv("API_PORT", "8000"))
    reload = os.getenv("DEBUG", "false").lower() == "true"

    uvicorn.run(
        "openrank_racing.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )
