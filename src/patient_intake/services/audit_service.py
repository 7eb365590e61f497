"""Audit sink for intake events."""

from typing import Protocol

from loguru import logger

from patient_intake.logging import AUDIT_EXTRA_KEY
from patient_intake.models.audit_model import AuditEvent


class AuditSink(Protocol):
    """Destination for audit events."""

    def emit(self, event: AuditEvent) -> None: ...


class LoguruAuditSink:
    """Write audit events as structured loguru records.

    The record's ``extra["audit"]`` holds exactly ``AuditEvent.to_log_fields()``.
    """

    def emit(self, event: AuditEvent) -> None:
        fields = event.to_log_fields()
        logger.bind(**{AUDIT_EXTRA_KEY: fields}).info(f"Audit: {fields['event']} [correlation: {fields['correlationId']}]")
