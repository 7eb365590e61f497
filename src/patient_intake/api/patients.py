"""
Patient intake API.

Single endpoint creating a patient. Request handling is delegated to
PatientIntakeService; validation and persistence errors are turned into
responses by the handlers in ``patient_intake.exception_handlers``.
"""

from fastapi import APIRouter, Depends, Response, status

from patient_intake.constants import CORRELATION_ID_HEADER
from patient_intake.models.api_model import (
    PatientCreateResponse,
    PatientRecordInput,
    PersistenceErrorResponse,
    ValidationErrorResponse,
)
from patient_intake.services.patient_intake_service import PatientIntakeService, get_patient_intake_service

router = APIRouter()


@router.post(
    "/patients",
    response_model=PatientCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": PersistenceErrorResponse},
    },
)
def create_patient(
    patient: PatientRecordInput,
    response: Response,
    intake_service: PatientIntakeService = Depends(get_patient_intake_service),
) -> PatientCreateResponse:
    """Create a new patient.

    Args:
        patient: Request body with name, dateOfBirth and optional address
        response: Outgoing response, used to attach the correlation id header
        intake_service: Patient intake service instance

    Returns:
        PatientCreateResponse with the assigned identifier
    """
    created = intake_service.create_patient(patient)
    response.headers[CORRELATION_ID_HEADER] = created.correlation_id
    return PatientCreateResponse(id=created.id)
