"""Service for patient intake."""

from functools import lru_cache

from loguru import logger

from patient_intake.exceptions import PersistenceError
from patient_intake.models.api_model import PatientRecordInput
from patient_intake.models.audit_model import AuditEvent
from patient_intake.models.base_model import CreatedPatient
from patient_intake.services.audit_service import AuditSink, LoguruAuditSink
from patient_intake.services.repository import PatientRepository, SqlPatientRepository
from patient_intake.services.validation import validate_patient_record
from patient_intake.settings import Settings, get_settings
from patient_intake.utils.clock import Clock, utc_now
from patient_intake.utils.identifiers import generate_correlation_id


class PatientIntakeService:
    """Validate, audit and persist new patients.

    Collaborators are passed in explicitly. The service keeps no state
    between calls.
    """

    def __init__(
        self,
        repository: PatientRepository,
        audit_sink: AuditSink,
        settings: Settings | None = None,
        clock: Clock = utc_now,
    ):
        self.repository = repository
        self.audit_sink = audit_sink
        self.settings = settings or get_settings()
        self.clock = clock

    def create_patient(self, record: PatientRecordInput) -> CreatedPatient:
        """Create a new patient.

        Validation runs before any side effect. On success exactly one audit
        event is emitted and exactly one repository save is made.

        Args:
            record: Request payload

        Returns:
            CreatedPatient with the assigned id and the audit correlation id

        Raises:
            PatientValidationError: If the payload is rejected
            PersistenceError: If the repository fails; not retried
        """
        patient = validate_patient_record(
            record,
            today=self.clock().date(),
            earliest=self.settings.earliest_date_of_birth,
        )

        correlation_id = generate_correlation_id()
        self.audit_sink.emit(AuditEvent.patient_create(correlation_id))

        try:
            patient_id = self.repository.save(patient.name, patient.date_of_birth, patient.address)
        except PersistenceError as e:
            e.correlation_id = correlation_id
            logger.error(f"Service: create_patient - persistence failed [correlation: {correlation_id}]")
            raise
        except Exception as e:
            logger.error(f"Service: create_patient - persistence failed [correlation: {correlation_id}] ({type(e).__name__})")
            raise PersistenceError(correlation_id=correlation_id) from e

        return CreatedPatient(id=patient_id, correlation_id=correlation_id)


@lru_cache
def get_patient_intake_service() -> PatientIntakeService:
    """Get the patient intake service singleton.

    The @lru_cache decorator ensures this functions as a singleton,
    returning the same instance for all calls.

    Returns:
        PatientIntakeService wired to the SQL repository and the loguru audit sink
    """
    return PatientIntakeService(SqlPatientRepository(), LoguruAuditSink())
