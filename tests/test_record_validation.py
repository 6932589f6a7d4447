"""Tests des validations d'enregistrements / Record validation tests."""

from sqlalchemy.exc import SQLAlchemyError

from app.services.record_validation import (
    can_delete_client,
    validate_client_duplicate,
    validate_user_email_duplicate,
)
from app.services.results import Err


async def test_client_email_duplicate_is_case_insensitive(db, company, client_acme):
    result = await validate_client_duplicate(db, "Someone Else", company.id, email="DESK@acme.test")

    assert result.value.message == "A client with this email already exists: Acme Offices"


async def test_client_name_and_phone_duplicate(db, company, client_acme):
    result = await validate_client_duplicate(db, "Acme Offices", company.id, phone="555-0100")
    same_name_other_phone = await validate_client_duplicate(db, "Acme Offices", company.id, phone="555-9999")

    assert result.value.message == "A client with this name and phone already exists."
    assert same_name_other_phone.value.is_valid


async def test_client_duplicate_excludes_self(db, company, client_acme):
    result = await validate_client_duplicate(
        db, "Acme Offices", company.id, email="desk@acme.test", phone="555-0100", exclude_client_id=client_acme.id
    )

    assert result.value.is_valid


async def test_client_duplicate_scoped_to_company(db, other_company, client_acme):
    result = await validate_client_duplicate(db, "Acme Offices", other_company.id, email="desk@acme.test")

    assert result.value.is_valid


async def test_can_delete_client(db, company, cleaner, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03")

    with_history = await can_delete_client(db, client_acme.id, company.id)
    clean = await can_delete_client(db, client_beta.id, company.id)

    assert with_history.value.message == "This client has jobs or contracts history. Only deactivation is allowed."
    assert clean.value.is_valid


async def test_client_with_contract_only_cannot_be_deleted(db, company, client_acme, contract_acme):
    result = await can_delete_client(db, client_acme.id, company.id)

    assert not result.value.is_valid


async def test_user_email_duplicate(db, company, cleaner):
    result = await validate_user_email_duplicate(db, "MARIE@example.com", company.id)
    itself = await validate_user_email_duplicate(db, "marie@example.com", company.id, exclude_user_id=cleaner.id)

    assert result.value.message == "A user with this email already exists: Marie Tremblay"
    assert itself.value.is_valid


async def test_duplicate_lookup_failure(db, company, monkeypatch):
    async def _boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "execute", _boom)

    result = await validate_client_duplicate(db, "Acme Offices", company.id, email="desk@acme.test")

    assert isinstance(result, Err)
