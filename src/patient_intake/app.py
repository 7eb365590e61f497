"""Main FastAPI application module."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from patient_intake import __version__
from patient_intake.api.api_router import router as api_router
from patient_intake.database import dispose_db, init_db
from patient_intake.exception_handlers import register_exception_handlers
from patient_intake.logging import setup_logging, setup_sqlalchemy_logging
from patient_intake.settings import get_settings


@asynccontextmanager
async def app_lifespan(_app: FastAPI):
    """Handle startup and shutdown events for the main application."""
    settings = get_settings()
    _app.state.settings = settings  # type: ignore[attr-defined]

    setup_logging(log_level=settings.log_level, audit_log_file=settings.audit_log_file)
    setup_sqlalchemy_logging()

    init_db()

    logger.info(f"Patient intake service running at: http://{settings.host}:{settings.port}")
    logger.info("   Create patient: POST /legacy/patients")

    yield

    logger.info("Patient intake service shutting down")
    dispose_db()


app = FastAPI(
    lifespan=app_lifespan,
    title="Patient intake service",
    description="Validated patient creation with PHI-free audit logging",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/legacy")
