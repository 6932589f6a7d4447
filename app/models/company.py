"""Modèle Entreprise (tenant) / Company model (tenant)."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Company(Base):
    """Entreprise de nettoyage, unité d'isolation des données / Cleaning company, the data isolation unit."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), default="America/Toronto")  # IANA
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    users: Mapped[list["User"]] = relationship(back_populates="company")
    clients: Mapped[list["Client"]] = relationship(back_populates="company")

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
