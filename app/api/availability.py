"""Routes Disponibilité hebdomadaire / Weekly availability routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.cleaner_availability import CleanerAvailability
from app.models.user import User, UserRole
from app.schemas.availability import AvailabilityDay, AvailabilityRead
from app.services.audit_service import log_audit_action

router = APIRouter()


@router.get("/", response_model=list[AvailabilityRead])
async def list_availability(
    cleaner_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = select(CleanerAvailability).where(CleanerAvailability.company_id == user.company_id)
    if user.role == UserRole.CLEANER:
        query = query.where(CleanerAvailability.cleaner_id == user.id)
    elif cleaner_id is not None:
        query = query.where(CleanerAvailability.cleaner_id == cleaner_id)
    result = await db.execute(query.order_by(CleanerAvailability.cleaner_id, CleanerAvailability.day_of_week))
    return result.scalars().all()


@router.put("/{cleaner_id}", response_model=list[AvailabilityRead])
async def replace_availability(
    cleaner_id: int,
    days: list[AvailabilityDay],
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Remplacer le modèle hebdomadaire d'un cleaner / Replace a cleaner's weekly template.

    Un cleaner ne peut modifier que le sien / Cleaners may only edit their own.
    """
    if user.role == UserRole.CLEANER and cleaner_id != user.id:
        raise HTTPException(status_code=403, detail="Cleaners can only edit their own availability")
    cleaner = await db.get(User, cleaner_id)
    if not cleaner or cleaner.company_id != user.company_id:
        raise HTTPException(status_code=404, detail="Cleaner not found")

    weekdays = [d.day_of_week for d in days]
    if len(weekdays) != len(set(weekdays)):
        raise HTTPException(status_code=422, detail="Each day_of_week may appear only once")

    await db.execute(delete(CleanerAvailability).where(CleanerAvailability.cleaner_id == cleaner_id))
    rows = [
        CleanerAvailability(company_id=user.company_id, cleaner_id=cleaner_id, **d.model_dump())
        for d in sorted(days, key=lambda d: d.day_of_week)
    ]
    db.add_all(rows)
    await db.flush()
    log_audit_action(
        db, "availability_updated", "cleaner_availability", cleaner_id, user.company_id, user.id,
        after={"days": [d.model_dump() for d in days]},
    )
    return rows
