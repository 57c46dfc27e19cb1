# main.py
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from datetime import datetime
from pydantic import BaseModel, Field
from dotenv import load_dotenv
from common.config import initialize_config, get_config, is_configured
from common.logger import get_app_logger
from common.logger.logger_middleware import RequestLoggingMiddleware
from common.api_error import ConfigurationError, AppError, DatabaseError
from typing import Any
from contextlib import asynccontextmanager

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    import sys

    sys.exit(1)

from polyclinic.db import DbManager  # noqa: E402
from polyclinic.api.v1 import (  # noqa: E402
    appointment_router,
    doctor_router,
    patient_router,
    user_router,
)

config = get_config()
logger = get_app_logger(name=__name__, track_timing=True)

app_title = config.app_title
app_version = config.app_version


@asynccontextmanager
async def lifespan(app: FastAPI):
    _db_config = config.database
    if not _db_config:
        raise RuntimeError("Database configuration required")

    db_manager = DbManager.from_config(_db_config)
    logger.info("Database configuration", **db_manager.get_config_snapshot())
    await db_manager.verify_connection()

    if _db_config.auto_create_schema:
        await db_manager.create_schema()
    else:
        # Fail fast when the schema was never migrated
        try:
            await db_manager.verify_migrations_current()
        except RuntimeError as e:
            logger.error("Migration check failed", error=str(e))
            logger.error("Run 'alembic upgrade head'")
            await db_manager.dispose()
            raise

    app.state.db_manager = db_manager

    yield
    logger.info("shutting down")
    await db_manager.dispose()


app = FastAPI(
    title=app_title,
    version=app_version,
    description=f"Running in {config.environment.value} environment",
    lifespan=lifespan,
)
app.add_middleware(
    RequestLoggingMiddleware,
    expose_performance_headers=not config.environment.is_production,
    slow_request_threshold=config.api.slow_request_threshold_ms,
)

app.include_router(user_router)
app.include_router(patient_router)
app.include_router(doctor_router)
app.include_router(appointment_router)


def _error_body(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {
        "error": code,
        "message": message,
        "timestamp": datetime.now().isoformat(),
        **extra,
    }


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log = logger.error if isinstance(exc, DatabaseError) else logger.warning
    log(
        f"Domain Error: {exc.code}",
        path=request.url.path,
        error_code=exc.code,
        message=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning("Request validation failed", path=request.url.path, errors=details)
    return JSONResponse(
        status_code=400,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", details=details),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.critical(
        "Unhandled error", path=request.url.path, error=str(exc), exc_info=exc
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_ERROR", "Some error occurred. Please try again later."),
    )


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    logging_configured: bool = Field(..., description="Logging configuration status")
    log_level: str = Field(..., description="Application log level")
    database: dict[str, Any] = Field(default_factory=dict, description="Database probe")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message describing the failure")
    timestamp: datetime = Field(..., description="Server time when the error occurred")


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    responses={
        200: {"description": "System is healthy", "model": HealthCheckResponse},
        503: {"description": "System is unhealthy", "model": ErrorResponse},
    },
)
async def check_health(request: Request) -> HealthCheckResponse:
    db_manager = getattr(request.app.state, "db_manager", None)
    database = await db_manager.health_check() if db_manager else {"healthy": False}

    if not database.get("healthy"):
        logger.error("Health check failed", endpoint="/health", database=database)
        err = ErrorResponse(error="database unavailable", timestamp=datetime.now())
        raise HTTPException(status_code=503, detail=err.model_dump(mode="json"))

    logger.debug("Health check passed", version=app_version, endpoint="/health")
    return HealthCheckResponse(
        status="Healthy",
        timestamp=datetime.now(),
        version=app_version,
        logging_configured=is_configured(),
        log_level=config.logging.level_value,
        database=database,
    )


@app.get("/metrics")
async def metrics(request: Request) -> dict[str, Any]:
    """Logger timing and database reachability."""
    db_manager = getattr(request.app.state, "db_manager", None)
    database = await db_manager.health_check() if db_manager else {"healthy": False}
    return {
        "logger": logger.get_timing_stats(),
        "database": {
            "healthy": database["healthy"],
            "response_time_ms": database.get("response_time_ms"),
        },
    }


__all__ = ["app", "config"]
