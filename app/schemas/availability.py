"""Schémas Disponibilité hebdomadaire / Weekly availability schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.fields import TimeStr


class AvailabilityDay(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0 = dimanche / Sunday
    is_available: bool = True
    start_time: TimeStr | None = None
    end_time: TimeStr | None = None

    @model_validator(mode="after")
    def _check_window(self):
        if self.is_available and self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityRead(AvailabilityDay):
    model_config = ConfigDict(from_attributes=True)
    id: int
    cleaner_id: int
