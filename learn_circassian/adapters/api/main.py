# learn_circassian\adapters\api\main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learn_circassian import __version__
from learn_circassian.shared.config import AppEnv, settings
from learn_circassian.shared.container import container
from learn_circassian.shared.logging_config import configure_logging
from learn_circassian.shared.telemetry import instrument_fastapi, setup_telemetry

# Import Routers
# Note: We import the modules directly so 'container.wire' can patch them
from learn_circassian.adapters.api.routers import dictionary, health, store

logger = structlog.get_logger()

WIRED_MODULES = [
    "learn_circassian.adapters.api.routers.dictionary",
    "learn_circassian.adapters.api.routers.store",
    "learn_circassian.adapters.api.routers.health",
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application Lifecycle Manager.
    1. Startup: telemetry; the store connection itself opens lazily on first query.
    2. Shutdown: closes the store connection exactly once.
    """
    setup_telemetry(settings.OTEL_SERVICE_NAME)

    word_store = container.word_store()
    logger.info(
        "app_startup",
        env=settings.APP_ENV.value,
        store_path=word_store.path,
        store_ready=word_store.is_ready(),
    )

    yield

    logger.info("app_shutdown")
    await container.word_store().close()


def create_app() -> FastAPI:
    """
    Factory function to create the FastAPI application.
    """
    configure_logging()

    app = FastAPI(
        title="Learn Circassian Dictionary",
        version=__version__,
        description="Local search & lookup backend for the desktop dictionary",
        docs_url="/docs" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # Wire the Container: tells it which modules use @inject
    container.wire(modules=WIRED_MODULES)

    # The UI is served from a local origin (dev server or file://)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.DEBUG else ["http://localhost", "http://127.0.0.1", "null"],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_methods=["*"],
        allow_headers=["*"],
    )

    instrument_fastapi(app)

    # Global Exception Handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Standardizes HTTP errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "code": exc.status_code,
                "message": exc.detail,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catches unhandled exceptions so a single failing request never takes the
        process (and its shared store connection) down.
        """
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "code": 500,
                "message": "Internal Server Error" if not settings.DEBUG else str(exc),
            },
        )

    # Mount Routes
    app.include_router(health.router)
    app.include_router(dictionary.router)
    app.include_router(store.router)

    return app
