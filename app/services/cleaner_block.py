"""
Blocage des cleaners par absence approuvée / Cleaner blocking by approved absence.

Règle métier stricte : aucun job ne peut être créé ou réaffecté à un cleaner
dont une absence approuvée couvre la date du job. Aucun contournement.
Hard business rule: no job may be created for, or reassigned to, a cleaner
whose approved absence covers the job date. No bypass.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.absence_request import AbsenceRequest, AbsenceStatus
from app.services.results import BlockDecision, CheckResult, Err, Ok

logger = logging.getLogger(__name__)


async def get_blocked_cleaners_for_date(
    db: AsyncSession, date: str, company_id: int
) -> CheckResult[list[int]]:
    """Cleaners avec une absence approuvée couvrant la date / Cleaners with an approved absence covering date.

    Plage [start_date, end_date] incluse / Inclusive [start_date, end_date] range.
    """
    query = (
        select(AbsenceRequest.cleaner_id)
        .where(
            AbsenceRequest.company_id == company_id,
            AbsenceRequest.status == AbsenceStatus.APPROVED,
            AbsenceRequest.start_date <= date,
            AbsenceRequest.end_date >= date,
        )
        .distinct()
    )
    try:
        result = await db.execute(query)
    except SQLAlchemyError:
        logger.exception("Absence lookup failed for company %s on %s", company_id, date)
        return Err("Could not load approved absences")
    return Ok(sorted(result.scalars().all()))


async def validate_job_creation(
    db: AsyncSession, cleaner_id: int, date: str, company_id: int
) -> CheckResult[BlockDecision]:
    """Le cleaner peut-il recevoir un job à cette date ? / Can the cleaner take a job on this date?"""
    blocked = await get_blocked_cleaners_for_date(db, date, company_id)
    if isinstance(blocked, Err):
        return blocked
    if cleaner_id in blocked.value:
        return Ok(BlockDecision(
            can_create=False,
            message=f"This cleaner has an approved absence on {date}. Jobs cannot be scheduled for them on this date.",
        ))
    return Ok(BlockDecision(can_create=True))
