"""Schémas Contrat / Contract schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.contract import ContractStatus
from app.schemas.fields import DateStr, reject_null


class ContractBase(BaseModel):
    client_id: int
    contract_number: str = Field(min_length=1, max_length=30)
    status: ContractStatus = ContractStatus.DRAFT
    start_date: DateStr | None = None
    end_date: DateStr | None = None
    frequency: str | None = None
    monthly_value: float | None = None
    notes: str | None = None


class ContractCreate(ContractBase):
    @model_validator(mode="after")
    def _check_period(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class ContractUpdate(BaseModel):
    contract_number: str | None = None
    status: ContractStatus | None = None
    start_date: DateStr | None = None
    end_date: DateStr | None = None
    frequency: str | None = None
    monthly_value: float | None = None
    notes: str | None = None

    @field_validator("contract_number", "status")
    @classmethod
    def _required(cls, value):
        return reject_null(value)


class ContractRead(ContractBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    company_id: int


class ActiveContractRead(BaseModel):
    client_id: int
    has_active_contract: bool
    contract_id: int | None = None
