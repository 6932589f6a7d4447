"""Schémas Job et validation de planning / Job and schedule validation schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.job import JobStatus
from app.schemas.fields import DateStr, TimeStr, reject_null


class JobBase(BaseModel):
    client_id: int
    cleaner_id: int
    scheduled_date: DateStr
    start_time: TimeStr
    duration_minutes: int = Field(gt=0, le=24 * 60)
    services: list[str] = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=500)


class JobCreate(JobBase):
    pass


class JobUpdate(BaseModel):
    client_id: int | None = None
    cleaner_id: int | None = None
    scheduled_date: DateStr | None = None
    start_time: TimeStr | None = None
    duration_minutes: int | None = Field(default=None, gt=0, le=24 * 60)
    services: list[str] | None = Field(default=None, min_length=1)
    notes: str | None = Field(default=None, max_length=500)  # null efface / null clears

    @field_validator("client_id", "cleaner_id", "scheduled_date", "start_time", "duration_minutes", "services")
    @classmethod
    def _required(cls, value):
        return reject_null(value)


class JobRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    company_id: int
    client_id: int
    cleaner_id: int
    scheduled_date: str
    start_time: str | None
    end_time: str | None
    duration_minutes: int | None
    status: JobStatus
    services: list[str] = []
    notes: str | None
    completed_at: str | None

    @field_validator("services", mode="before")
    @classmethod
    def _split_services(cls, value):
        # Stocké en texte séparé par virgules / Stored as comma separated text
        if isinstance(value, str):
            return [s for s in value.split(",") if s]
        return value or []


class ScheduleCheckRequest(BaseModel):
    """Vérification à blanc d'un créneau / Dry-run check of a slot."""
    client_id: int
    cleaner_id: int
    scheduled_date: DateStr
    start_time: TimeStr
    duration_minutes: int = Field(gt=0, le=24 * 60)
    exclude_job_id: int | None = None


class ScheduleCheckResponse(BaseModel):
    allowed: bool
    message: str | None = None
    stage: str | None = None
    error: bool = False


class UnavailableCleanersResponse(BaseModel):
    date: str
    start_time: str
    duration_minutes: int
    cleaner_ids: list[int]
