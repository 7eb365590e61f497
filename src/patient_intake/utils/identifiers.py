"""Identifier generation for patients and audit correlation."""

import secrets
import string
import time
from uuid import uuid4

from patient_intake.constants import PATIENT_ID_PREFIX

MIN_RANDOM_CHARS = 8


def generate_patient_id(length: int = 16) -> str:
    """Generate a patient identifier.

    The identifier is ``P`` followed by ``length`` characters:
    - Current millisecond timestamp in base36 (8 chars until 2059)
    - Random alphanumerics filling the rest (at least 8 chars)

    Args:
        length: Number of characters after the prefix (default: 16)

    Returns:
        The generated identifier, e.g. ``Plw3k9x2aQ7rT0mZb``

    Raises:
        ValueError: If ``length`` leaves fewer than 8 random characters
    """
    timestamp = to_base36(int(time.time() * 1000))

    random_length = length - len(timestamp)
    if random_length < MIN_RANDOM_CHARS:
        raise ValueError(f"Patient id length {length} leaves fewer than {MIN_RANDOM_CHARS} random characters")

    random_chars = string.ascii_letters + string.digits
    random_part = "".join(secrets.choice(random_chars) for _ in range(random_length))

    return PATIENT_ID_PREFIX + timestamp + random_part


def generate_correlation_id() -> str:
    """Generate a correlation id for one intake request (32 hex characters)."""
    return uuid4().hex


def to_base36(number: int) -> str:
    """Convert a non-negative number to base36 representation."""
    alphabet = string.digits + string.ascii_lowercase
    base36 = ""

    while number:
        number, i = divmod(number, 36)
        base36 = alphabet[i] + base36

    return base36 or "0"
