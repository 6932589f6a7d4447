"""Modèle Job (intervention planifiée) / Job model (scheduled service visit)."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class JobStatus(str, enum.Enum):
    """Statut du job / Job status."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False)
    # Suppression du cleaner => suppression de ses jobs / Deleting a cleaner cascades to their jobs
    cleaner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    scheduled_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    start_time: Mapped[str | None] = mapped_column(String(5))  # HH:MM
    end_time: Mapped[str | None] = mapped_column(String(5))  # HH:MM, derived
    duration_minutes: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, values_callable=lambda e: [m.value for m in e]), default=JobStatus.SCHEDULED
    )
    services: Mapped[str | None] = mapped_column(Text)  # liste séparée par virgules / comma separated
    notes: Mapped[str | None] = mapped_column(Text)
    completed_at: Mapped[str | None] = mapped_column(String(32))  # ISO 8601
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    client: Mapped["Client"] = relationship(back_populates="jobs")
    cleaner: Mapped["User"] = relationship(back_populates="jobs")

    def __repr__(self) -> str:
        return f"<Job {self.id} {self.scheduled_date} {self.start_time}>"
