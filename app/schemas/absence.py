"""Schémas Demande d'absence / Absence request schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.absence_request import AbsenceStatus, AbsenceType
from app.schemas.fields import DateStr


class AbsenceCreate(BaseModel):
    cleaner_id: int | None = None  # défaut : l'utilisateur courant / default: current user
    start_date: DateStr
    end_date: DateStr
    request_type: AbsenceType = AbsenceType.TIME_OFF
    reason: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class AbsenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    company_id: int
    cleaner_id: int
    start_date: str
    end_date: str
    request_type: AbsenceType
    reason: str | None
    status: AbsenceStatus
    approved_by: int | None
    approved_at: str | None
