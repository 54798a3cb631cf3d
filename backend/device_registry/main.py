"""Main FastAPI application."""

import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from device_registry.api import devices, errors, metrics
from device_registry.core import settings, setup_logging
from device_registry.core.logging import LoggerAdapter, get_logger
from device_registry.core.metrics import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUESTS_TOTAL,
    route_template,
    set_app_info,
)
from device_registry.db import create_tables, engine, ping

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
)

set_app_info(version=settings.api_version, environment=settings.environment)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def prometheus_metrics_middleware(request: Request, call_next):
    """Collect Prometheus metrics for all HTTP requests."""
    if request.url.path == "/metrics":
        return await call_next(request)

    method = request.method
    endpoint = route_template(request.app.router.routes, request.scope)

    HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
    start_time = time.perf_counter()
    status_code = "500"
    try:
        response = await call_next(request)
        status_code = str(response.status_code)
        return response
    finally:
        duration = time.perf_counter() - start_time
        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, endpoint=endpoint).observe(duration)
        HTTP_REQUESTS_TOTAL.labels(method=method, endpoint=endpoint, status_code=status_code).inc()


app.include_router(metrics.router)
app.include_router(devices.router, prefix=settings.api_prefix)


@app.on_event("startup")
def ensure_schema() -> None:
    """Create tables on startup; there is no migration tree."""
    create_tables(engine)


@app.get("/health")
async def health() -> dict:
    """Basic health check endpoint (alias for /health/live)."""
    return {"status": "healthy"}


@app.get("/health/live")
async def health_live() -> dict:
    """Liveness probe: the process answers requests."""
    return {"status": "healthy"}


@app.get("/health/ready")
def health_ready():
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    try:
        ping(engine)
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "dependencies": {"database": {"status": "unhealthy", "error": str(exc)}},
            },
        )
    return {"status": "healthy", "dependencies": {"database": {"status": "healthy"}}}


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }


def request_logger(request: Request) -> LoggerAdapter:
    """Logger carrying the request method and path in every record."""
    return LoggerAdapter(logger, {"method": request.method, "path": request.url.path})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, missing fields and bad path ids are client errors (400)."""
    errors_payload = jsonable_encoder(exc.errors())
    request_logger(request).info("Rejected request", extra={"errors": errors_payload})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation error", "errors": errors_payload},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Degrade anything unclassified to a generic 500 without leaking internals."""
    request_logger(request).error("Unhandled error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": errors.GENERIC_ERROR_DETAIL},
    )
