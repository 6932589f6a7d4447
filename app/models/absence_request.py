"""Modèle Demande d'absence / Absence (off) request model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class AbsenceStatus(str, enum.Enum):
    """Statut de la demande / Request status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AbsenceType(str, enum.Enum):
    """Type d'absence / Absence type."""
    TIME_OFF = "time_off"
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"


class AbsenceRequest(Base):
    """Demande d'indisponibilité d'un cleaner / Cleaner unavailability request.

    Seules les demandes approuvées bloquent la planification, sur la plage
    [start_date, end_date] incluse.
    Only approved requests block scheduling, over the inclusive
    [start_date, end_date] range.
    """
    __tablename__ = "absence_requests"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    cleaner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    end_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    request_type: Mapped[AbsenceType] = mapped_column(
        Enum(AbsenceType, values_callable=lambda e: [m.value for m in e]), default=AbsenceType.TIME_OFF
    )
    reason: Mapped[str | None] = mapped_column(Text)
    status: Mapped[AbsenceStatus] = mapped_column(
        Enum(AbsenceStatus, values_callable=lambda e: [m.value for m in e]), default=AbsenceStatus.PENDING
    )
    approved_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    approved_at: Mapped[str | None] = mapped_column(String(32))  # ISO 8601
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    cleaner: Mapped["User"] = relationship(foreign_keys=[cleaner_id])

    def __repr__(self) -> str:
        return f"<AbsenceRequest cleaner={self.cleaner_id} {self.start_date}..{self.end_date} {self.status.value}>"
