"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from botdesk import __version__
from botdesk.config import get_settings
from botdesk.core.rate_limiter import limiter
from botdesk.core.storage import StorageProvider, create_storage
from botdesk.features.analytics.router import router as analytics_router
from botdesk.features.bot_config.router import router as bot_config_router
from botdesk.features.conversations.router import router as conversations_router
from botdesk.features.health.router import router as health_router
from botdesk.features.templates.router import router as templates_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 with one entry per issue."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": errors},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    logger.info(
        "Starting chatbot console in %s mode (storage: %s)",
        settings.app_env,
        app.state.storage.kind,
    )
    yield
    logger.info("Shutting down chatbot console")
    await app.state.storage.close()


def create_app(storage: StorageProvider | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        storage: Storage provider to serve from. When omitted one is
            selected from settings (relational if DATABASE_URL is set).
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Chatbot Console",
        description="WhatsApp-style chatbot management console API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
    )

    # Storage is selected once per application
    app.state.storage = storage if storage is not None else create_storage(settings)

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(analytics_router)
    app.include_router(conversations_router)
    app.include_router(bot_config_router)
    app.include_router(templates_router)
    app.include_router(health_router)

    # Liveness check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": __version__}

    # API info endpoint
    @app.get("/")
    async def root():
        return {
            "name": "Chatbot Console",
            "version": __version__,
            "docs": "/docs" if settings.app_debug else None,
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "botdesk.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
    )
