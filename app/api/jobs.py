"""
Routes Jobs / Job API routes.

Création et replanification passent par la chaîne de validation
(absence -> contrat -> chevauchement) avant toute écriture.
Creation and rescheduling go through the check pipeline
(block -> contract -> overlap) before anything is written.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.clients import get_company_client
from app.api.deps import get_current_user, require_staff
from app.api.users import get_company_cleaner
from app.database import get_db
from app.models.job import Job, JobStatus
from app.models.user import User, UserRole
from app.schemas.fields import OptionalDateQuery
from app.schemas.job import JobCreate, JobRead, JobUpdate
from app.services.audit_service import log_audit_action
from app.services.job_workflow import JobCheckOutcome, run_job_checks
from app.services.record_validation import can_complete_job
from app.services.schedule_validation import JobCandidate
from app.services.time_calculator import TimeCalculatorService

logger = logging.getLogger(__name__)

router = APIRouter()

# Champs qui déclenchent une revalidation / Fields that trigger revalidation
_SCHEDULING_FIELDS = {"client_id", "cleaner_id", "scheduled_date", "start_time", "duration_minutes"}


def _snapshot(job: Job) -> dict:
    return {
        "client_id": job.client_id,
        "cleaner_id": job.cleaner_id,
        "scheduled_date": job.scheduled_date,
        "start_time": job.start_time,
        "duration_minutes": job.duration_minutes,
        "status": job.status.value,
    }


def _raise_for_outcome(outcome: JobCheckOutcome) -> None:
    if outcome.allowed:
        return
    if outcome.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=outcome.message)
    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=outcome.message)


async def _get_company_job(db: AsyncSession, job_id: int, company_id: int) -> Job:
    result = await db.execute(select(Job).where(Job.id == job_id, Job.company_id == company_id))
    job = result.scalar_one_or_none()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("/", response_model=list[JobRead])
async def list_jobs(
    date: OptionalDateQuery = None,
    cleaner_id: int | None = None,
    job_status: JobStatus | None = Query(default=None, alias="status"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les jobs (un cleaner ne voit que les siens) / List jobs (cleaners only see their own)."""
    query = select(Job).where(Job.company_id == user.company_id)
    if user.role == UserRole.CLEANER:
        query = query.where(Job.cleaner_id == user.id)
    elif cleaner_id is not None:
        query = query.where(Job.cleaner_id == cleaner_id)
    if date is not None:
        query = query.where(Job.scheduled_date == date)
    if job_status is not None:
        query = query.where(Job.status == job_status)
    result = await db.execute(query.order_by(Job.scheduled_date, Job.start_time))
    return result.scalars().all()


@router.get("/{job_id}", response_model=JobRead)
async def get_job(job_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    job = await _get_company_job(db, job_id, user.company_id)
    if user.role == UserRole.CLEANER and job.cleaner_id != user.id:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("/", response_model=JobRead, status_code=201)
async def create_job(data: JobCreate, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    """Créer un job après validation / Create a job once every check passes."""
    await get_company_client(db, data.client_id, user.company_id)
    await get_company_cleaner(db, data.cleaner_id, user.company_id)

    candidate = JobCandidate(
        client_id=data.client_id,
        cleaner_id=data.cleaner_id,
        date=data.scheduled_date,
        time=data.start_time,
        duration_minutes=data.duration_minutes,
    )
    outcome = await run_job_checks(db, candidate, user.company_id)
    _raise_for_outcome(outcome)

    job = Job(
        company_id=user.company_id,
        client_id=data.client_id,
        cleaner_id=data.cleaner_id,
        scheduled_date=data.scheduled_date,
        start_time=data.start_time,
        end_time=TimeCalculatorService.add_minutes_to_time(data.start_time, data.duration_minutes),
        duration_minutes=data.duration_minutes,
        status=JobStatus.SCHEDULED,
        services=",".join(data.services),
        notes=data.notes,
    )
    db.add(job)
    await db.flush()
    log_audit_action(db, "job_created", "job", job.id, user.company_id, user.id, after=_snapshot(job))
    logger.info("Job %s scheduled for cleaner %s on %s", job.id, job.cleaner_id, job.scheduled_date)
    return job


@router.put("/{job_id}", response_model=JobRead)
async def update_job(
    job_id: int,
    data: JobUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    """Modifier / replanifier un job / Edit or reschedule a job.

    Le job édité est exclu de sa propre vérification de chevauchement.
    The edited job is excluded from its own overlap check.
    """
    job = await _get_company_job(db, job_id, user.company_id)
    if job.status != JobStatus.SCHEDULED:
        raise HTTPException(status_code=409, detail="Only scheduled jobs can be edited.")

    updates = data.model_dump(exclude_unset=True)
    before = _snapshot(job)

    if _SCHEDULING_FIELDS & updates.keys():
        if "client_id" in updates:
            await get_company_client(db, updates["client_id"], user.company_id)
        if "cleaner_id" in updates:
            await get_company_cleaner(db, updates["cleaner_id"], user.company_id)

        candidate = JobCandidate(
            client_id=updates.get("client_id", job.client_id),
            cleaner_id=updates.get("cleaner_id", job.cleaner_id),
            date=updates.get("scheduled_date", job.scheduled_date),
            time=updates.get("start_time", job.start_time or ""),
            duration_minutes=updates.get("duration_minutes", job.duration_minutes or 0),
            exclude_job_id=job.id,
        )
        outcome = await run_job_checks(db, candidate, user.company_id)
        _raise_for_outcome(outcome)

    if "services" in updates:
        updates["services"] = ",".join(updates["services"])
    for key, value in updates.items():
        setattr(job, key, value)
    _, end = TimeCalculatorService.job_interval(job.start_time, job.duration_minutes)
    job.end_time = TimeCalculatorService.minutes_to_time(end)

    await db.flush()
    log_audit_action(db, "job_updated", "job", job.id, user.company_id, user.id, before=before, after=_snapshot(job))
    return job


@router.post("/{job_id}/complete", response_model=JobRead)
async def complete_job(job_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    """Marquer un job terminé / Mark a job completed (cleaners: their own jobs only)."""
    job = await _get_company_job(db, job_id, user.company_id)
    if user.role == UserRole.CLEANER and job.cleaner_id != user.id:
        raise HTTPException(status_code=404, detail="Job not found")

    check = can_complete_job(job)
    if not check.is_valid:
        raise HTTPException(status_code=409, detail=check.message)

    before = _snapshot(job)
    job.status = JobStatus.COMPLETED
    job.completed_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    await db.flush()
    log_audit_action(db, "job_completed", "job", job.id, user.company_id, user.id, before=before, after=_snapshot(job))
    return job


@router.post("/{job_id}/cancel", response_model=JobRead)
async def cancel_job(job_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    job = await _get_company_job(db, job_id, user.company_id)
    if job.status != JobStatus.SCHEDULED:
        raise HTTPException(status_code=409, detail="Only scheduled jobs can be cancelled.")
    before = _snapshot(job)
    job.status = JobStatus.CANCELLED
    await db.flush()
    log_audit_action(db, "job_cancelled", "job", job.id, user.company_id, user.id, before=before, after=_snapshot(job))
    return job
