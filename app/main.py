"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.errors import ConfigurationError, MonitoringError
from app.core.logger import setup_logger
from app.monitoring.eligibility import DEFAULT_CATEGORY_TABLE, validate_category_table


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    try:
        validate_category_table(DEFAULT_CATEGORY_TABLE)
    except ConfigurationError as e:
        logger.error(f"Refusing to start: {e.message}")
        raise
    logger.info(f"{settings.PROJECT_NAME} v{settings.VERSION} started")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Wellness windows, ACWR training load, eligibility and session snapshots.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan)


@app.exception_handler(MonitoringError)
async def monitoring_error_handler(request: Request, exc: MonitoringError):
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_payload())


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Squad Readiness API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "squad-readiness-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "project url": settings.PROJECT_URL
    }
