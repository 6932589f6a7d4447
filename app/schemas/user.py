"""
Schémas Utilisateur / User schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.fields import reject_null


class UserCreate(BaseModel):
    username: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=200)
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole = UserRole.CLEANER
    is_active: bool = True


class UserUpdate(BaseModel):
    username: str | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=200)
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("username", "email", "password", "role", "is_active")
    @classmethod
    def _required(cls, value):
        return reject_null(value)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    company_id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserMe(BaseModel):
    """Profil de l'utilisateur connecté / Current user profile."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str
    email: str
    full_name: str
    role: UserRole
    company_id: int
    company_name: str
    company_timezone: str
