"""Modèle Disponibilité hebdomadaire / Weekly availability template model."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class CleanerAvailability(Base):
    """Fenêtre de disponibilité récurrente par jour de semaine / Recurring per-weekday availability window.

    Distinct des absences ponctuelles / Distinct from one-off absences.
    day_of_week : 0 = dimanche / Sunday ... 6 = samedi / Saturday.
    """
    __tablename__ = "cleaner_availability"
    __table_args__ = (UniqueConstraint("cleaner_id", "day_of_week"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    cleaner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    start_time: Mapped[str | None] = mapped_column(String(5))  # HH:MM
    end_time: Mapped[str | None] = mapped_column(String(5))  # HH:MM

    def __repr__(self) -> str:
        return f"<CleanerAvailability cleaner={self.cleaner_id} day={self.day_of_week}>"
