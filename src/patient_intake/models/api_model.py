"""API models for the patient intake service."""

from pydantic import BaseModel, ConfigDict, Field

from patient_intake.exceptions import ValidationErrorKind


class PatientRecordInput(BaseModel):
    """Request body for patient creation.

    Fields are accepted as sent; validation and normalization happen in the
    intake service so each rejection maps to a ``ValidationErrorKind``.
    Unknown keys are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", hide_input_in_errors=True)

    name: str | None = None
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    address: str | None = None

    def __repr__(self) -> str:
        return "PatientRecordInput(<redacted>)"

    __str__ = __repr__


class PatientCreateResponse(BaseModel):
    """Response body for a created patient."""

    id: str


class ValidationErrorResponse(BaseModel):
    """Client error response body."""

    detail: str
    kind: ValidationErrorKind


class PersistenceErrorResponse(BaseModel):
    """Server error response body."""

    model_config = ConfigDict(populate_by_name=True)

    detail: str
    correlation_id: str | None = Field(default=None, alias="correlationId")
