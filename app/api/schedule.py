"""
Routes de vérification du planning / Schedule check routes.
Utilisées par le formulaire de job avant soumission.
Used by the job form before submission.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.clients import get_company_client
from app.api.deps import require_staff
from app.api.users import get_company_cleaner
from app.database import get_db
from app.models.user import User
from app.schemas.fields import TIME_PATTERN, DateQuery
from app.schemas.job import ScheduleCheckRequest, ScheduleCheckResponse, UnavailableCleanersResponse
from app.services.cleaner_block import get_blocked_cleaners_for_date
from app.services.job_workflow import run_job_checks
from app.services.results import Err
from app.services.schedule_validation import JobCandidate, get_unavailable_cleaners

router = APIRouter()


@router.post("/validate", response_model=ScheduleCheckResponse)
async def validate_slot(
    data: ScheduleCheckRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    """Exécuter la chaîne complète sans écrire / Run the full pipeline without writing."""
    # Mêmes 404 que la création / Same 404s as job creation
    await get_company_client(db, data.client_id, user.company_id)
    await get_company_cleaner(db, data.cleaner_id, user.company_id)

    candidate = JobCandidate(
        client_id=data.client_id,
        cleaner_id=data.cleaner_id,
        date=data.scheduled_date,
        time=data.start_time,
        duration_minutes=data.duration_minutes,
        exclude_job_id=data.exclude_job_id,
    )
    outcome = await run_job_checks(db, candidate, user.company_id)
    return ScheduleCheckResponse(
        allowed=outcome.allowed, message=outcome.message, stage=outcome.stage, error=outcome.error
    )


@router.get("/unavailable-cleaners", response_model=UnavailableCleanersResponse)
async def unavailable_cleaners(
    date: DateQuery,
    start_time: str = Query(..., pattern=TIME_PATTERN),
    duration_minutes: int = Query(..., gt=0, le=24 * 60),
    exclude_job_id: int | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    """Cleaners à désactiver dans le sélecteur / Cleaners to disable in the assignment selector."""
    found = await get_unavailable_cleaners(db, date, start_time, duration_minutes, user.company_id, exclude_job_id)
    if isinstance(found, Err):
        raise HTTPException(status_code=503, detail=f"{found.reason}. Please try again.")
    return UnavailableCleanersResponse(
        date=date, start_time=start_time, duration_minutes=duration_minutes, cleaner_ids=found.value
    )


@router.get("/blocked-cleaners", response_model=list[int])
async def blocked_cleaners(
    date: DateQuery,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    """Cleaners en absence approuvée à la date / Cleaners on approved absence on the date."""
    found = await get_blocked_cleaners_for_date(db, date, user.company_id)
    if isinstance(found, Err):
        raise HTTPException(status_code=503, detail=f"{found.reason}. Please try again.")
    return found.value
