"""Todo API

FastAPI application exposing todo CRUD and user token authentication over
a MongoDB document store.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .api.deps import get_storage_service
from .api.errors import register_exception_handlers
from .api.routers import health_router, todos_router, users_router
from .config import settings
from .logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown logic"""
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting %s v%s (%s)", settings.app_name, settings.app_version, settings.environment)

    storage = app.dependency_overrides.get(get_storage_service, get_storage_service)()
    await storage.ensure_indexes()
    yield

    storage.close()
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.environment == "development",
    lifespan=lifespan,
)

# Add CORS middleware
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods.split(","),
        allow_headers=settings.cors_headers.split(","),
        expose_headers=["x-auth"],
    )

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(todos_router)
app.include_router(users_router)


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Redirect root to API docs"""
    return RedirectResponse(url="/docs")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "todo_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
