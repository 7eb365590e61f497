"""Tests for the patient intake service."""

from datetime import UTC, datetime

import pytest

from patient_intake.exceptions import PatientValidationError, PersistenceError, ValidationErrorKind
from patient_intake.models.api_model import PatientRecordInput
from patient_intake.models.audit_model import AUDIT_FIELDS
from patient_intake.services.audit_service import LoguruAuditSink
from patient_intake.settings import Settings

SOMCHAI = {"name": "Somchai", "dateOfBirth": "1985-03-10", "address": "Bangkok"}


def test_create_patient_end_to_end(intake_service, repository, audit_sink):
    created = intake_service.create_patient(PatientRecordInput(**SOMCHAI))

    assert created.id == "P0000TEST"
    assert repository.calls == [("Somchai", datetime(1985, 3, 10, tzinfo=UTC), "Bangkok")]
    assert repository.calls[0][1].isoformat() == "1985-03-10T00:00:00+00:00"

    assert len(audit_sink.events) == 1
    fields = audit_sink.events[0].to_log_fields()
    assert set(fields) <= AUDIT_FIELDS
    assert fields["event"] == "patient.create"
    assert fields["correlationId"] == created.correlation_id
    for value in fields.values():
        assert value not in {"Somchai", "1985-03-10", "Bangkok"}


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_has_no_side_effects(intake_service, repository, audit_sink, log_records, name):
    with pytest.raises(PatientValidationError) as exc_info:
        intake_service.create_patient(PatientRecordInput(name=name, dateOfBirth="1985-03-10"))

    assert exc_info.value.kind == ValidationErrorKind.EMPTY_NAME
    assert repository.calls == []
    assert audit_sink.events == []
    assert log_records == []


def test_future_date_of_birth_rejected(intake_service, repository, audit_sink):
    with pytest.raises(PatientValidationError) as exc_info:
        intake_service.create_patient(PatientRecordInput(name="Somchai", dateOfBirth="2024-06-02"))

    assert exc_info.value.kind == ValidationErrorKind.INVALID_DATE_OF_BIRTH
    assert repository.calls == []
    assert audit_sink.events == []


@pytest.mark.parametrize(
    "date_of_birth,expected",
    [
        ("1990-05-01T00:00:00-05:00", datetime(1990, 5, 1, tzinfo=UTC)),
        ("1990-05-01T23:00:00-05:00", datetime(1990, 5, 2, tzinfo=UTC)),
        ("1990-05-01T02:00:00+05:00", datetime(1990, 4, 30, tzinfo=UTC)),
        ("1990-05-01", datetime(1990, 5, 1, tzinfo=UTC)),
    ],
)
def test_repository_receives_utc_date(intake_service, repository, date_of_birth, expected):
    intake_service.create_patient(PatientRecordInput(name="Somchai", dateOfBirth=date_of_birth))

    saved = repository.calls[0][1]
    assert saved == expected
    assert saved.utcoffset().total_seconds() == 0


def test_clock_decides_future(make_intake_service):
    later = make_intake_service(clock=lambda: datetime(2024, 6, 2, 0, 0, tzinfo=UTC))
    assert later.create_patient(PatientRecordInput(name="Somchai", dateOfBirth="2024-06-02")).id == "P0000TEST"


def test_earliest_date_of_birth_from_settings(make_intake_service):
    service = make_intake_service(settings=Settings(_env_file=None, earliest_date_of_birth="1950-01-01"))
    with pytest.raises(PatientValidationError):
        service.create_patient(PatientRecordInput(name="Somchai", dateOfBirth="1949-12-31"))


def test_each_request_gets_new_correlation_id(intake_service, audit_sink):
    first = intake_service.create_patient(PatientRecordInput(**SOMCHAI))
    second = intake_service.create_patient(PatientRecordInput(**SOMCHAI))

    assert first.correlation_id != second.correlation_id
    assert [event.correlation_id for event in audit_sink.events] == [first.correlation_id, second.correlation_id]


def test_repository_failure_surfaces_as_persistence_error(make_repository, make_intake_service, audit_sink):
    cause = RuntimeError("disk full")
    repository = make_repository(error=cause)
    service = make_intake_service(repository=repository)

    with pytest.raises(PersistenceError) as exc_info:
        service.create_patient(PatientRecordInput(**SOMCHAI))

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.correlation_id == audit_sink.events[0].correlation_id
    assert len(repository.calls) == 1


def test_repository_persistence_error_gets_correlation_id(make_repository, make_intake_service, audit_sink):
    error = PersistenceError()
    repository = make_repository(error=error)
    service = make_intake_service(repository=repository)

    with pytest.raises(PersistenceError) as exc_info:
        service.create_patient(PatientRecordInput(**SOMCHAI))

    assert exc_info.value is error
    assert error.correlation_id == audit_sink.events[0].correlation_id
    assert len(repository.calls) == 1


def test_logs_contain_no_phi(make_intake_service, log_records):
    service = make_intake_service(audit_sink=LoguruAuditSink())

    created = service.create_patient(PatientRecordInput(**SOMCHAI))

    audit_records = [record for record in log_records if "audit" in record["extra"]]
    assert len(audit_records) == 1
    assert audit_records[0]["extra"]["audit"] == {"event": "patient.create", "correlationId": created.correlation_id}
    for record in log_records:
        text = record["message"] + str(record["extra"])
        for value in ("Somchai", "1985-03-10", "Bangkok"):
            assert value not in text


def test_failure_logs_contain_no_phi(make_repository, make_intake_service, log_records):
    repository = make_repository(error=RuntimeError("insert Somchai failed"))
    service = make_intake_service(repository=repository)

    with pytest.raises(PersistenceError):
        service.create_patient(PatientRecordInput(**SOMCHAI))

    assert log_records
    assert any("RuntimeError" in record["message"] for record in log_records)
    for record in log_records:
        assert "Somchai" not in record["message"]
