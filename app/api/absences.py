"""
Routes Demandes d'absence / Absence (off) request routes.
Un cleaner demande, un manager approuve ou rejette. Une demande approuvée
bloque la planification du cleaner sur la période.
A cleaner requests, a manager approves or rejects. An approved request
blocks the cleaner from scheduling over the period.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_staff
from app.database import get_db
from app.models.absence_request import AbsenceRequest, AbsenceStatus
from app.models.user import User, UserRole
from app.schemas.absence import AbsenceCreate, AbsenceRead
from app.services.audit_service import log_audit_action

router = APIRouter()


def _details(req: AbsenceRequest) -> dict:
    return {
        "cleaner_id": req.cleaner_id,
        "start_date": req.start_date,
        "end_date": req.end_date,
        "request_type": req.request_type.value,
        "status": req.status.value,
    }


async def _get_company_request(db: AsyncSession, request_id: int, company_id: int) -> AbsenceRequest:
    result = await db.execute(
        select(AbsenceRequest).where(AbsenceRequest.id == request_id, AbsenceRequest.company_id == company_id)
    )
    req = result.scalar_one_or_none()
    if not req:
        raise HTTPException(status_code=404, detail="Absence request not found")
    return req


@router.get("/", response_model=list[AbsenceRead])
async def list_absences(
    status: AbsenceStatus | None = None,
    cleaner_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les demandes (un cleaner ne voit que les siennes) / List requests (cleaners only see their own)."""
    query = select(AbsenceRequest).where(AbsenceRequest.company_id == user.company_id)
    if user.role == UserRole.CLEANER:
        query = query.where(AbsenceRequest.cleaner_id == user.id)
    elif cleaner_id is not None:
        query = query.where(AbsenceRequest.cleaner_id == cleaner_id)
    if status is not None:
        query = query.where(AbsenceRequest.status == status)
    result = await db.execute(query.order_by(AbsenceRequest.id.desc()))
    return result.scalars().all()


@router.post("/", response_model=AbsenceRead, status_code=201)
async def create_absence(data: AbsenceCreate, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    """Soumettre une demande / Submit a request (cleaners only for themselves)."""
    cleaner_id = data.cleaner_id or user.id
    if user.role == UserRole.CLEANER and cleaner_id != user.id:
        raise HTTPException(status_code=403, detail="Cleaners can only request time off for themselves")
    if cleaner_id != user.id:
        cleaner = await db.get(User, cleaner_id)
        if not cleaner or cleaner.company_id != user.company_id:
            raise HTTPException(status_code=404, detail="Cleaner not found")

    req = AbsenceRequest(
        company_id=user.company_id,
        cleaner_id=cleaner_id,
        start_date=data.start_date,
        end_date=data.end_date,
        request_type=data.request_type,
        reason=data.reason,
        status=AbsenceStatus.PENDING,
    )
    db.add(req)
    await db.flush()
    log_audit_action(db, "off_request_created", "absence_request", req.id, user.company_id, user.id, after=_details(req))
    return req


async def _decide(db: AsyncSession, request_id: int, user: User, new_status: AbsenceStatus) -> AbsenceRequest:
    req = await _get_company_request(db, request_id, user.company_id)
    if req.status != AbsenceStatus.PENDING:
        raise HTTPException(status_code=409, detail=f"Request already {req.status.value}")
    before = _details(req)
    req.status = new_status
    req.approved_by = user.id
    req.approved_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    await db.flush()
    log_audit_action(
        db, f"off_request_{new_status.value}", "absence_request", req.id, user.company_id, user.id,
        before=before, after=_details(req),
    )
    return req


@router.post("/{request_id}/approve", response_model=AbsenceRead)
async def approve_absence(request_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    """Approuver : le cleaner est bloqué du planning / Approve: the cleaner is blocked from the schedule."""
    return await _decide(db, request_id, user, AbsenceStatus.APPROVED)


@router.post("/{request_id}/reject", response_model=AbsenceRead)
async def reject_absence(request_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    return await _decide(db, request_id, user, AbsenceStatus.REJECTED)
