"""Tests des conflits de planning / Schedule conflict tests."""

from sqlalchemy.exc import SQLAlchemyError

from app.models.job import JobStatus
from app.services.results import Err, Ok
from app.services.schedule_validation import JobCandidate, get_unavailable_cleaners, validate_schedule


def _candidate(client, cleaner, time, duration=60, date="2024-07-03", exclude_job_id=None):
    return JobCandidate(
        client_id=client.id,
        cleaner_id=cleaner.id,
        date=date,
        time=time,
        duration_minutes=duration,
        exclude_job_id=exclude_job_id,
    )


async def test_overlap_other_client_names_cleaner(db, company, cleaner, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    result = await validate_schedule(db, _candidate(client_beta, cleaner, "10:00"), company.id)

    assert isinstance(result, Ok)
    assert not result.value.is_valid
    assert result.value.message == "Marie Tremblay is already scheduled at this time (09:00-11:00)."


async def test_overlap_same_client(db, company, cleaner, client_acme, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    result = await validate_schedule(db, _candidate(client_acme, cleaner, "10:30"), company.id)

    assert result.value.message == "A job already exists for this client with this cleaner at this time."


async def test_back_to_back_is_allowed(db, company, cleaner, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    result = await validate_schedule(db, _candidate(client_beta, cleaner, "11:00"), company.id)

    assert result.value.is_valid
    # Et juste avant / and right before
    before = await validate_schedule(db, _candidate(client_beta, cleaner, "08:00"), company.id)
    assert before.value.is_valid


async def test_cancelled_jobs_are_ignored(db, company, cleaner, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120, status=JobStatus.CANCELLED)

    result = await validate_schedule(db, _candidate(client_beta, cleaner, "10:00"), company.id)

    assert result.value.is_valid


async def test_completed_jobs_still_conflict(db, company, cleaner, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120, status=JobStatus.COMPLETED)

    result = await validate_schedule(db, _candidate(client_beta, cleaner, "10:00"), company.id)

    assert not result.value.is_valid


async def test_other_date_or_cleaner_does_not_conflict(db, company, cleaner, cleaner2, client_acme, client_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    other_day = await validate_schedule(db, _candidate(client_beta, cleaner, "10:00", date="2024-07-04"), company.id)
    other_cleaner = await validate_schedule(db, _candidate(client_beta, cleaner2, "10:00"), company.id)

    assert other_day.value.is_valid
    assert other_cleaner.value.is_valid


async def test_edited_job_is_excluded(db, company, cleaner, client_acme, make_job):
    job = await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    result = await validate_schedule(
        db, _candidate(client_acme, cleaner, "09:30", 120, exclude_job_id=job.id), company.id
    )

    assert result.value.is_valid


async def test_missing_time_uses_defaults(db, company, cleaner, client_acme, client_beta, make_job):
    # Sans heure ni durée : 09:00-11:00 / no time nor duration: 09:00-11:00
    await make_job(client_acme, cleaner, "2024-07-03", None, None)

    clash = await validate_schedule(db, _candidate(client_beta, cleaner, "10:30", 30), company.id)
    free = await validate_schedule(db, _candidate(client_beta, cleaner, "11:00", 30), company.id)

    assert clash.value.message == "Marie Tremblay is already scheduled at this time (09:00-11:00)."
    assert free.value.is_valid


async def test_other_company_jobs_are_invisible(db, company, other_company, cleaner, client_acme, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    result = await validate_schedule(db, _candidate(client_acme, cleaner, "10:00"), other_company.id)

    assert result.value.is_valid


async def test_read_failure_is_an_error(db, company, cleaner, client_acme, monkeypatch):
    async def _boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "execute", _boom)

    result = await validate_schedule(db, _candidate(client_acme, cleaner, "10:00"), company.id)

    assert isinstance(result, Err)
    assert result.reason == "Could not load existing jobs"


async def test_unavailable_cleaners(db, company, cleaner, cleaner2, client_acme, make_job, make_absence):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)
    await make_absence(cleaner2, "2024-07-01", "2024-07-05")

    busy = await get_unavailable_cleaners(db, "2024-07-03", "10:00", 60, company.id)
    later = await get_unavailable_cleaners(db, "2024-07-03", "11:00", 60, company.id)

    assert busy.value == sorted([cleaner.id, cleaner2.id])
    # Le cleaner en absence reste indisponible toute la journée / The absent cleaner stays out all day
    assert later.value == [cleaner2.id]


async def test_unavailable_cleaners_excludes_edited_job(db, company, cleaner, client_acme, make_job):
    job = await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    found = await get_unavailable_cleaners(db, "2024-07-03", "10:00", 60, company.id, exclude_job_id=job.id)

    assert found.value == []


async def test_unavailable_cleaners_read_failure(db, company, monkeypatch):
    async def _boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "execute", _boom)

    found = await get_unavailable_cleaners(db, "2024-07-03", "10:00", 60, company.id)

    assert isinstance(found, Err)
