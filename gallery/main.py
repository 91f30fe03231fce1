# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from gallery import __version__
from gallery.config import settings
from gallery.database import GalleryRegistry
from gallery.exceptions import GalleryError
from gallery.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Set up root logging from the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    configure_logging()
    logger.info(f"Serving galleries from {settings.data_dir.resolve()}")

    yield

    # Shutdown: Cleanup
    logger.info("Closing gallery databases...")
    GalleryRegistry.get_instance().close_all()


app = FastAPI(
    title="Simple Gallery",
    description="Rotating picture delivery for token holders, with an admin API",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log method, path, status and duration. Query strings carry tokens and are left out."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms"
    )
    return response


@app.exception_handler(GalleryError)
async def gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
    """Map gallery errors onto HTTP responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from gallery.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1/galleries/{gallery}")
