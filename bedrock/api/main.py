"""FastAPI application entry point for Bedrock."""

import logging

import structlog
from fastapi import Depends, FastAPI

from bedrock.api.dependencies import get_controller
from bedrock.api.metrics import router as metrics_router
from bedrock.api.reports import router as reports_router
from bedrock.api.store import router as store_router
from bedrock.config.settings import get_settings
from bedrock.store.controller import SnapshotController

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
logging.basicConfig(level=_LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value])
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="Bedrock API",
    description="Business continuity planning store: records, metrics and reports.",
    version=APP_VERSION,
)

app.include_router(store_router)
app.include_router(metrics_router)
app.include_router(reports_router)


# --- Infrastructure Endpoints ---


@app.get("/health")
async def health_check(
    controller: SnapshotController = Depends(get_controller),
) -> dict:
    """Liveness probe. Reports how many departments the current snapshot holds."""
    return {
        "status": "ok",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "departments": len(controller.snapshot.departments),
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "Bedrock",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }


logger.info("bedrock_api_ready", version=APP_VERSION, backend=settings.SNAPSHOT_BACKEND.value)
