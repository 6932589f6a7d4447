"""Tests de la chaîne de validation / Check pipeline tests."""

from sqlalchemy.exc import SQLAlchemyError

from app.models.contract import ContractStatus
from app.services import job_workflow
from app.services.job_workflow import STAGE_BLOCK, STAGE_CONTRACT, STAGE_OVERLAP, run_job_checks
from app.services.results import Err
from app.services.schedule_validation import JobCandidate


def _candidate(client, cleaner, time="09:00", duration=120, date="2024-07-03", exclude_job_id=None):
    return JobCandidate(
        client_id=client.id,
        cleaner_id=cleaner.id,
        date=date,
        time=time,
        duration_minutes=duration,
        exclude_job_id=exclude_job_id,
    )


async def test_all_checks_pass(db, company, cleaner, client_acme, contract_acme):
    outcome = await run_job_checks(db, _candidate(client_acme, cleaner), company.id)

    assert outcome.allowed
    assert outcome.message is None
    assert not outcome.error


async def test_block_runs_first(db, company, cleaner, client_acme, make_absence):
    # Pas de contrat non plus : l'absence est signalée en premier / No contract either: the absence wins
    await make_absence(cleaner, "2024-07-01", "2024-07-05")

    outcome = await run_job_checks(db, _candidate(client_acme, cleaner), company.id)

    assert not outcome.allowed
    assert outcome.stage == STAGE_BLOCK
    assert "approved absence on 2024-07-03" in outcome.message


async def test_contract_runs_before_overlap(db, company, cleaner, client_acme, contract_acme, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)
    contract_acme.status = ContractStatus.EXPIRED
    await db.commit()

    outcome = await run_job_checks(db, _candidate(client_acme, cleaner, "10:00"), company.id)

    assert outcome.stage == STAGE_CONTRACT


async def test_overlap_rejected(db, company, cleaner, client_acme, client_beta, contract_acme, contract_beta, make_job):
    await make_job(client_acme, cleaner, "2024-07-03", "09:00", 120)

    outcome = await run_job_checks(db, _candidate(client_beta, cleaner, "10:00", 60), company.id)

    assert not outcome.allowed
    assert outcome.stage == STAGE_OVERLAP
    assert not outcome.error


async def test_failed_read_blocks_submission(db, company, cleaner, client_acme, contract_acme, monkeypatch):
    async def _unreadable(*args, **kwargs):
        return Err("Could not load approved absences")

    monkeypatch.setattr(job_workflow, "validate_job_creation", _unreadable)

    outcome = await run_job_checks(db, _candidate(client_acme, cleaner), company.id)

    assert not outcome.allowed
    assert outcome.error
    assert outcome.stage == STAGE_BLOCK
    assert outcome.message == "Could not verify the cleaner's absences. The job was not saved, please try again."


async def test_database_error_fails_closed(db, company, cleaner, client_acme, contract_acme, monkeypatch):
    async def _boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "execute", _boom)

    outcome = await run_job_checks(db, _candidate(client_acme, cleaner), company.id)

    assert not outcome.allowed
    assert outcome.error
