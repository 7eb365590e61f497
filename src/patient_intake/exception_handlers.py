"""Global exception handlers for the FastAPI application.

This module converts application exceptions into HTTP responses. Response
bodies carry rule descriptions only, never request values.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from patient_intake.constants import CORRELATION_ID_HEADER
from patient_intake.exceptions import PatientValidationError, PersistenceError, ValidationErrorKind
from patient_intake.models.api_model import PersistenceErrorResponse, ValidationErrorResponse


async def patient_validation_error_handler(_request: Request, exc: PatientValidationError) -> JSONResponse:
    """Map a rejected patient record to 400."""
    body = ValidationErrorResponse(detail=exc.message, kind=exc.kind)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map a malformed request body to 400 without echoing its content."""
    problems = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors())
    body = ValidationErrorResponse(detail=problems or "Invalid request", kind=ValidationErrorKind.INVALID_REQUEST)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


async def persistence_error_handler(_request: Request, exc: PersistenceError) -> JSONResponse:
    """Map a repository failure to 500."""
    body = PersistenceErrorResponse(detail=exc.message, correlation_id=exc.correlation_id)
    headers = {CORRELATION_ID_HEADER: exc.correlation_id} if exc.correlation_id else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(PatientValidationError, patient_validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    logger.debug("Registered exception handlers")
