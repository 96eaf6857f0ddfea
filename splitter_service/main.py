"""FastAPI app entry: config, logging, health, and error handling."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from splitter_service.config.logging import configure_logging, get_logger
from splitter_service.config.settings import get_settings
from splitter_service.config.splitting.static import get_active_profile_name, load_split_profiles
from splitter_service.controllers.routes.split import router as split_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and split profiles, so a broken static.json fails fast."""
    settings = get_settings()
    configure_logging()
    profiles = load_split_profiles()
    logger.info(
        "Application starting",
        extra={
            "app_name": settings.app_name,
            "environment": settings.environment,
            "profiles": sorted(profiles),
            "active_profile": get_active_profile_name(),
        },
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Text Splitter Service",
    description="Recursive, language-aware text splitting with overlapping chunks",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(split_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: do not leak stack traces or internal details to the client."""
    logger.exception("Unhandled error", extra={"error": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )
