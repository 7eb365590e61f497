"""Shared fixtures: fake collaborators for the intake service."""

from datetime import UTC, datetime

import pytest
from loguru import logger

from patient_intake.services.patient_intake_service import PatientIntakeService
from patient_intake.settings import Settings

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class FakePatientRepository:
    """Records save calls and returns a fixed identifier."""

    def __init__(self, patient_id: str = "P0000TEST", error: Exception | None = None):
        self.patient_id = patient_id
        self.error = error
        self.calls: list[tuple] = []

    def save(self, name, date_of_birth, address) -> str:
        self.calls.append((name, date_of_birth, address))
        if self.error is not None:
            raise self.error
        return self.patient_id


class FakeAuditSink:
    """Collects emitted audit events."""

    def __init__(self):
        self.events = []

    def emit(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def repository() -> FakePatientRepository:
    return FakePatientRepository()


@pytest.fixture
def audit_sink() -> FakeAuditSink:
    return FakeAuditSink()


@pytest.fixture
def intake_service(repository, audit_sink) -> PatientIntakeService:
    return PatientIntakeService(repository, audit_sink, settings=Settings(_env_file=None), clock=lambda: FIXED_NOW)


@pytest.fixture
def log_records():
    """Capture every loguru record emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def make_repository():
    """Factory for fake repositories, e.g. ones that fail on save."""
    return FakePatientRepository


@pytest.fixture
def make_intake_service(repository, audit_sink):
    """Factory for intake services with selected collaborators replaced."""

    def _make(repository=repository, audit_sink=audit_sink, settings=None, clock=lambda: FIXED_NOW):
        return PatientIntakeService(repository, audit_sink, settings=settings or Settings(_env_file=None), clock=clock)

    return _make
