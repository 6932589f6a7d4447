"""Schémas Client / Client schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.fields import reject_null


class ClientBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    notes: str | None = None
    is_active: bool = True


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=150)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    notes: str | None = None
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def _required(cls, value):
        return reject_null(value)


class ClientRead(ClientBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    company_id: int
    email: str | None = None
