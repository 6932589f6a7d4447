"""Tests du blocage par absence / Absence block tests."""

from sqlalchemy.exc import SQLAlchemyError

from app.models.absence_request import AbsenceStatus
from app.services.cleaner_block import get_blocked_cleaners_for_date, validate_job_creation
from app.services.results import Err, Ok


async def test_approved_absence_blocks_every_day_of_range(db, company, cleaner, make_absence):
    await make_absence(cleaner, "2024-07-01", "2024-07-05")

    for day in ("2024-07-01", "2024-07-03", "2024-07-05"):
        blocked = await get_blocked_cleaners_for_date(db, day, company.id)
        assert blocked.value == [cleaner.id]

    for day in ("2024-06-30", "2024-07-06"):
        blocked = await get_blocked_cleaners_for_date(db, day, company.id)
        assert blocked.value == []


async def test_pending_and_rejected_do_not_block(db, company, cleaner, cleaner2, make_absence):
    await make_absence(cleaner, "2024-07-01", "2024-07-05", status=AbsenceStatus.PENDING)
    await make_absence(cleaner2, "2024-07-01", "2024-07-05", status=AbsenceStatus.REJECTED)

    blocked = await get_blocked_cleaners_for_date(db, "2024-07-03", company.id)

    assert blocked.value == []


async def test_overlapping_absences_listed_once(db, company, cleaner, make_absence):
    await make_absence(cleaner, "2024-07-01", "2024-07-05")
    await make_absence(cleaner, "2024-07-03", "2024-07-10")

    blocked = await get_blocked_cleaners_for_date(db, "2024-07-04", company.id)

    assert blocked.value == [cleaner.id]


async def test_other_company_absences_ignored(db, company, other_company, cleaner, make_absence):
    await make_absence(cleaner, "2024-07-01", "2024-07-05")

    blocked = await get_blocked_cleaners_for_date(db, "2024-07-03", other_company.id)

    assert blocked.value == []


async def test_validate_job_creation(db, company, cleaner, cleaner2, make_absence):
    await make_absence(cleaner, "2024-07-01", "2024-07-05")

    denied = await validate_job_creation(db, cleaner.id, "2024-07-03", company.id)
    allowed = await validate_job_creation(db, cleaner2.id, "2024-07-03", company.id)

    assert isinstance(denied, Ok)
    assert not denied.value.can_create
    assert denied.value.message == (
        "This cleaner has an approved absence on 2024-07-03. Jobs cannot be scheduled for them on this date."
    )
    assert allowed.value.can_create
    assert allowed.value.message is None


async def test_read_failure_propagates(db, company, cleaner, monkeypatch):
    async def _boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "execute", _boom)

    result = await validate_job_creation(db, cleaner.id, "2024-07-03", company.id)

    assert isinstance(result, Err)
    assert result.reason == "Could not load approved absences"
