"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wormwatch import __version__
from wormwatch.config import get_settings
from wormwatch.database import close_db, init_db
from wormwatch.errors import WormWatchError
from wormwatch.routers import (
    admin_router,
    health_router,
    metrics_router,
    reports_router,
    stats_router,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Worm Watch API...")

    await init_db()
    logger.info("Database initialized")

    if not settings.admin_enabled:
        logger.warning("ADMIN_SECRET is not set; admin endpoints will reject every request")

    yield

    # Shutdown
    logger.info("Shutting down Worm Watch API...")
    await close_db()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Worm Watch",
    description="Community reporting of insect sightings with weekly and seasonal statistics",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WormWatchError)
async def wormwatch_error_handler(request: Request, exc: WormWatchError) -> JSONResponse:
    """Render domain errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies and query strings as 400s."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = first.get("loc", ())
        field = ".".join(str(p) for p in location if p not in ("body", "query", "header"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# Include routers
app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(reports_router)
app.include_router(stats_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Root endpoint - shows API info."""
    return {
        "name": "Worm Watch",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
