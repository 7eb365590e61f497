"""Global constants for the patient intake service.

This module defines constants used throughout the application to avoid
hardcoded strings and make the codebase more maintainable.
"""

# Audit event names
AUDIT_EVENT_PATIENT_CREATE = "patient.create"

# Response header carrying the audit correlation id
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Prefix for generated patient identifiers
PATIENT_ID_PREFIX = "P"
