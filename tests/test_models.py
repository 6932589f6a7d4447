"""Tests des modèles / Model tests."""

from app.models.absence_request import AbsenceStatus, AbsenceType
from app.models.client import Client
from app.models.contract import Contract, ContractStatus
from app.models.job import JobStatus
from app.models.user import User, UserRole


def test_client_repr():
    c = Client(id=1, name="Acme Offices")
    assert "Acme" in repr(c)


def test_contract_repr():
    c = Contract(contract_number="C-001", status=ContractStatus.ACTIVE)
    assert repr(c) == "<Contract C-001 (active)>"


def test_user_full_name():
    assert User(first_name="Marie", last_name="Tremblay").full_name == "Marie Tremblay"
    assert User(first_name="Marie").full_name == "Marie"
    assert User().full_name == ""


def test_enums():
    assert UserRole.CLEANER.value == "cleaner"
    assert ContractStatus.ACTIVE.value == "active"
    assert JobStatus.CANCELLED.value == "cancelled"
    assert AbsenceStatus.APPROVED.value == "approved"
    assert AbsenceType.SICK.value == "sick"
