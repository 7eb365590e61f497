"""Validation and normalization of inbound patient records.

Error messages describe the rule that failed and never echo the value.
"""

from datetime import UTC, date, datetime

from patient_intake.exceptions import PatientValidationError, ValidationErrorKind
from patient_intake.models.api_model import PatientRecordInput
from patient_intake.models.base_model import PatientRecord


def normalize_date_of_birth(value: str) -> datetime:
    """Convert an ISO 8601 date or date-time to midnight UTC of its UTC calendar date.

    A date without time is taken as that calendar day. A date-time without an
    offset is interpreted as UTC. A date-time with an offset is converted to UTC
    first, so ``1990-05-01T23:00:00-05:00`` becomes ``1990-05-02T00:00:00Z``.

    Args:
        value: ISO 8601 text from the request

    Returns:
        Timezone-aware datetime at 00:00:00 UTC

    Raises:
        PatientValidationError: If the value is not ISO 8601 or its UTC date is out of range
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        # Offsets at the edges of the datetime range overflow on conversion
        utc_date = parsed.astimezone(UTC).date()
    except (ValueError, OverflowError):
        raise PatientValidationError(
            ValidationErrorKind.INVALID_DATE_OF_BIRTH,
            "dateOfBirth must be an ISO 8601 date or date-time",
        ) from None

    return datetime(utc_date.year, utc_date.month, utc_date.day, tzinfo=UTC)


def validate_patient_record(record: PatientRecordInput, today: date, earliest: date) -> PatientRecord:
    """Validate a request payload and build its normalized copy.

    Args:
        record: Request payload, left untouched
        today: Current UTC calendar date; later dates of birth are rejected
        earliest: Oldest plausible date of birth

    Returns:
        A frozen ``PatientRecord``

    Raises:
        PatientValidationError: On an empty name or an invalid date of birth
    """
    name = (record.name or "").strip()
    if not name:
        raise PatientValidationError(ValidationErrorKind.EMPTY_NAME, "name must not be empty")

    if record.date_of_birth is None or not record.date_of_birth.strip():
        raise PatientValidationError(ValidationErrorKind.INVALID_DATE_OF_BIRTH, "dateOfBirth is required")

    date_of_birth = normalize_date_of_birth(record.date_of_birth)
    if date_of_birth.date() > today:
        raise PatientValidationError(ValidationErrorKind.INVALID_DATE_OF_BIRTH, "dateOfBirth must not be in the future")
    if date_of_birth.date() < earliest:
        raise PatientValidationError(
            ValidationErrorKind.INVALID_DATE_OF_BIRTH,
            f"dateOfBirth must not be earlier than {earliest.isoformat()}",
        )

    address = (record.address or "").strip() or None
    return PatientRecord(name=name, date_of_birth=date_of_birth, address=address)
