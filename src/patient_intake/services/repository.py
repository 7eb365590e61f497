"""Patient persistence.

``PatientRepository`` is the contract the intake service depends on. Every
``save`` inserts a new patient with a freshly generated identifier; there is
no idempotency key and no duplicate detection.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from patient_intake.database import borrow_db_session
from patient_intake.exceptions import PersistenceError
from patient_intake.models.db_model import Patient as PatientModel
from patient_intake.utils.identifiers import generate_patient_id

SessionFactory = Callable[[], AbstractContextManager[Session]]


class PatientRepository(Protocol):
    """Persistence contract for new patients."""

    def save(self, name: str, date_of_birth: datetime, address: str | None) -> str:
        """Persist a patient and return its newly assigned identifier."""
        ...


class SqlPatientRepository:
    """SQLModel-backed patient repository."""

    def __init__(self, session_factory: SessionFactory = borrow_db_session):
        self.session_factory = session_factory

    def save(self, name: str, date_of_birth: datetime, address: str | None) -> str:
        """Insert a patient row.

        Args:
            name: Validated patient name
            date_of_birth: Date of birth normalized to midnight UTC
            address: Optional address

        Returns:
            The generated patient identifier

        Raises:
            PersistenceError: If the database rejects the insert or is unreachable
        """
        patient_id = generate_patient_id()
        patient = PatientModel(id=patient_id, name=name, date_of_birth=date_of_birth, address=address)

        try:
            with self.session_factory() as session:
                session.add(patient)
                try:
                    session.commit()
                except SQLAlchemyError:
                    session.rollback()
                    raise
        except SQLAlchemyError as e:
            # Only the exception type; statement details may reference patient data
            logger.error(f"Repository: save failed for patient {patient_id} ({type(e).__name__})")
            raise PersistenceError() from e

        logger.debug(f"Repository: saved patient {patient_id}")
        return patient_id
