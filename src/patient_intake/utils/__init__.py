"""Utility functions for the patient intake service."""

from patient_intake.utils.clock import Clock, utc_now
from patient_intake.utils.identifiers import generate_correlation_id, generate_patient_id, to_base36

__all__ = [
    "Clock",
    "generate_correlation_id",
    "generate_patient_id",
    "to_base36",
    "utc_now",
]
