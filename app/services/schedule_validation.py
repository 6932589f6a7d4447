"""
Validation des conflits de planning / Schedule conflict validation.

Un cleaner ne peut pas être réservé deux fois : deux jobs non annulés du même
cleaner à la même date ne peuvent pas avoir d'intervalles [début, fin) qui se
chevauchent. Deux jobs bout à bout ne sont pas en conflit.
A cleaner must not be double-booked: two non-cancelled jobs of the same
cleaner on the same date may not have overlapping [start, end) intervals.
Back-to-back jobs do not conflict.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job import Job, JobStatus
from app.models.user import User
from app.services.cleaner_block import get_blocked_cleaners_for_date
from app.services.results import VALID, CheckResult, Err, Ok, ValidationResult, invalid
from app.services.time_calculator import TimeCalculatorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobCandidate:
    """Job proposé à valider / Proposed job to validate.

    exclude_job_id : job en cours d'édition, ignoré par la vérification.
    exclude_job_id: job being edited, ignored by the check.
    """
    client_id: int
    cleaner_id: int
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    duration_minutes: int
    exclude_job_id: int | None = None

    @property
    def interval(self) -> tuple[int, int]:
        return TimeCalculatorService.job_interval(self.time, self.duration_minutes)


async def validate_schedule(
    db: AsyncSession, candidate: JobCandidate, company_id: int
) -> CheckResult[ValidationResult]:
    """Vérifier le chevauchement avec les jobs du cleaner / Check overlap against the cleaner's jobs."""
    query = (
        select(Job, User.first_name, User.last_name)
        .join(User, Job.cleaner_id == User.id)
        .where(
            Job.company_id == company_id,
            Job.cleaner_id == candidate.cleaner_id,
            Job.scheduled_date == candidate.date,
            Job.status != JobStatus.CANCELLED,
        )
    )
    if candidate.exclude_job_id is not None:
        query = query.where(Job.id != candidate.exclude_job_id)

    try:
        result = await db.execute(query)
    except SQLAlchemyError:
        logger.exception(
            "Job lookup failed for cleaner %s on %s (company %s)",
            candidate.cleaner_id, candidate.date, company_id,
        )
        return Err("Could not load existing jobs")

    start, end = candidate.interval
    for job, first_name, last_name in result.all():
        job_start, job_end = TimeCalculatorService.job_interval(job.start_time, job.duration_minutes)
        if not TimeCalculatorService.intervals_overlap(start, end, job_start, job_end):
            continue

        if job.client_id == candidate.client_id:
            return invalid("A job already exists for this client with this cleaner at this time.")

        cleaner_name = f"{first_name or ''} {last_name or ''}".strip() or "This cleaner"
        return invalid(
            f"{cleaner_name} is already scheduled at this time "
            f"({TimeCalculatorService.minutes_to_time(job_start)}"
            f"-{TimeCalculatorService.minutes_to_time(job_end)})."
        )

    return Ok(VALID)


async def get_unavailable_cleaners(
    db: AsyncSession,
    date: str,
    time: str,
    duration_minutes: int,
    company_id: int,
    exclude_job_id: int | None = None,
) -> CheckResult[list[int]]:
    """Cleaners indisponibles pour un créneau / Cleaners unavailable for a slot.

    Indisponible = absence approuvée à la date, ou job non annulé qui chevauche.
    Unavailable = approved absence on the date, or an overlapping non-cancelled job.
    Sert à désactiver les options du sélecteur d'affectation.
    Used to disable options in the assignment selector.
    """
    blocked = await get_blocked_cleaners_for_date(db, date, company_id)
    if isinstance(blocked, Err):
        return blocked
    unavailable = set(blocked.value)

    query = select(Job.id, Job.cleaner_id, Job.start_time, Job.duration_minutes).where(
        Job.company_id == company_id,
        Job.scheduled_date == date,
        Job.status != JobStatus.CANCELLED,
    )
    if exclude_job_id is not None:
        query = query.where(Job.id != exclude_job_id)

    try:
        result = await db.execute(query)
    except SQLAlchemyError:
        logger.exception("Job lookup failed for company %s on %s", company_id, date)
        return Err("Could not load existing jobs")

    start, end = TimeCalculatorService.job_interval(time, duration_minutes)
    for _job_id, cleaner_id, job_time, job_duration in result.all():
        if cleaner_id is None or cleaner_id in unavailable:
            continue
        job_start, job_end = TimeCalculatorService.job_interval(job_time, job_duration)
        if TimeCalculatorService.intervals_overlap(start, end, job_start, job_end):
            unavailable.add(cleaner_id)

    return Ok(sorted(unavailable))
