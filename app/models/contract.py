"""Modèle Contrat de service / Service contract model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ContractStatus(str, enum.Enum):
    """Statut du contrat / Contract status."""
    DRAFT = "draft"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class Contract(Base):
    """Contrat liant un client à un service facturable / Contract tying a client to billable service."""
    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False, index=True)
    contract_number: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[ContractStatus] = mapped_column(
        Enum(ContractStatus, values_callable=lambda e: [m.value for m in e]), default=ContractStatus.DRAFT
    )
    start_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    end_date: Mapped[str | None] = mapped_column(String(10))  # NULL = sans fin / open-ended
    frequency: Mapped[str | None] = mapped_column(String(20))  # weekly, biweekly, monthly
    monthly_value: Mapped[float | None] = mapped_column(Numeric(10, 2))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    client: Mapped["Client"] = relationship(back_populates="contracts")

    def __repr__(self) -> str:
        return f"<Contract {self.contract_number} ({self.status.value})>"
