"""API router initialization."""

from fastapi import APIRouter
from loguru import logger

from patient_intake.api.patients import router as patients_router

# Create main API router
router = APIRouter()

router.include_router(patients_router, tags=["patients"])

logger.debug("API router initialized (patients router mounted)")
