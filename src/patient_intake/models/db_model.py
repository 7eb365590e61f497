from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Patient(SQLModel, table=True):
    """Stored patient record."""

    __tablename__ = "patients"

    id: str = Field(primary_key=True, max_length=32)
    name: str
    date_of_birth: datetime = Field(sa_type=DateTime(timezone=True))
    address: str | None = None
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Patient(id={self.id!r})"
