from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class PatientRecord(BaseModel):
    """Validated, normalized patient record.

    Instances are frozen and always built as a new object from the request
    payload, never by mutating it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    date_of_birth: datetime
    address: str | None = None

    @field_validator("date_of_birth")
    @classmethod
    def require_utc_midnight(cls, v: datetime) -> datetime:
        """Reject values that were not normalized to a UTC calendar date."""
        if v.utcoffset() is None or v.utcoffset().total_seconds() != 0:
            raise ValueError("date_of_birth must be expressed in UTC")
        if (v.hour, v.minute, v.second, v.microsecond) != (0, 0, 0, 0):
            raise ValueError("date_of_birth must be anchored at midnight UTC")
        return v

    def __repr__(self) -> str:
        # Keep PHI out of tracebacks and accidental log interpolation
        return "PatientRecord(<redacted>)"

    __str__ = __repr__


class CreatedPatient(BaseModel):
    """Outcome of a successful intake."""

    model_config = ConfigDict(frozen=True)

    id: str
    correlation_id: str
