"""Audit event projection.

The audit log only ever sees ``AuditEvent`` instances. Its fields form the
allow-list of what may be written; any other key is rejected at construction.
"""

from pydantic import BaseModel, ConfigDict, Field

from patient_intake.constants import AUDIT_EVENT_PATIENT_CREATE


class AuditEvent(BaseModel):
    """Non-sensitive record that an action occurred."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    event: str
    correlation_id: str = Field(alias="correlationId")

    @classmethod
    def patient_create(cls, correlation_id: str) -> "AuditEvent":
        """Audit event for a patient creation request."""
        return cls(event=AUDIT_EVENT_PATIENT_CREATE, correlation_id=correlation_id)

    def to_log_fields(self) -> dict[str, str]:
        """Structured fields written to the log sink (``event``, ``correlationId``)."""
        return self.model_dump(by_alias=True)


AUDIT_FIELDS = frozenset(field.alias or name for name, field in AuditEvent.model_fields.items())
