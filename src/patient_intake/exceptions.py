"""Common exceptions for the patient intake service.

Messages carried by these exceptions are returned to callers and may be
logged, so they never include request values.
"""

from enum import StrEnum


class ValidationErrorKind(StrEnum):
    """Reason a patient record was rejected."""

    EMPTY_NAME = "EmptyName"
    INVALID_DATE_OF_BIRTH = "InvalidDateOfBirth"
    INVALID_REQUEST = "InvalidRequest"


class PatientValidationError(Exception):
    """Raised when caller-supplied patient data fails a precondition.

    Raised before any audit or persistence side effect takes place.
    """

    def __init__(self, kind: ValidationErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}")


class PersistenceError(Exception):
    """Raised when the patient repository fails to save a record.

    The original exception is chained as ``__cause__``. Persistence is not
    retried by the intake service.
    """

    def __init__(self, message: str = "Failed to save patient", correlation_id: str | None = None):
        self.message = message
        self.correlation_id = correlation_id
        super().__init__(message)
