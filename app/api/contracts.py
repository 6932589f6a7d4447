"""Routes Contrats / Contract API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.clients import get_company_client
from app.api.deps import get_current_user, raise_for_check, require_staff
from app.database import get_db
from app.models.contract import Contract, ContractStatus
from app.models.user import User
from app.schemas.contract import ActiveContractRead, ContractCreate, ContractRead, ContractUpdate
from app.services.audit_service import log_audit_action
from app.services.contract_validation import get_active_contract_for_client, validate_contract_active
from app.services.results import Err

router = APIRouter()


async def _get_company_contract(db: AsyncSession, contract_id: int, company_id: int) -> Contract:
    result = await db.execute(
        select(Contract).where(Contract.id == contract_id, Contract.company_id == company_id)
    )
    contract = result.scalar_one_or_none()
    if not contract:
        raise HTTPException(status_code=404, detail="Contract not found")
    return contract


@router.get("/", response_model=list[ContractRead])
async def list_contracts(
    client_id: int | None = None,
    status: ContractStatus | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = select(Contract).where(Contract.company_id == user.company_id).order_by(Contract.id.desc())
    if client_id is not None:
        query = query.where(Contract.client_id == client_id)
    if status is not None:
        query = query.where(Contract.status == status)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/client/{client_id}/active", response_model=ActiveContractRead)
async def active_contract_for_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Contrat actif et en cours du client / The client's active, in-period contract."""
    await get_company_client(db, client_id, user.company_id)
    found = await get_active_contract_for_client(db, client_id, user.company_id)
    if isinstance(found, Err):
        raise HTTPException(status_code=503, detail=f"{found.reason}. Please try again.")
    return ActiveContractRead(
        client_id=client_id, has_active_contract=found.value is not None, contract_id=found.value
    )


@router.get("/{contract_id}", response_model=ContractRead)
async def get_contract(contract_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    return await _get_company_contract(db, contract_id, user.company_id)


@router.post("/", response_model=ContractRead, status_code=201)
async def create_contract(data: ContractCreate, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    await get_company_client(db, data.client_id, user.company_id)
    if data.status == ContractStatus.ACTIVE:
        raise_for_check(await validate_contract_active(db, data.client_id, user.company_id))

    contract = Contract(company_id=user.company_id, **data.model_dump())
    db.add(contract)
    await db.flush()
    log_audit_action(
        db, "contract_created", "contract", contract.id, user.company_id, user.id,
        after=data.model_dump(mode="json"),
    )
    return contract


@router.put("/{contract_id}", response_model=ContractRead)
async def update_contract(
    contract_id: int,
    data: ContractUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    contract = await _get_company_contract(db, contract_id, user.company_id)
    updates = data.model_dump(exclude_unset=True)

    # Passage à "active" : un seul contrat actif par client / Switching to active: one per client
    if updates.get("status") == ContractStatus.ACTIVE and contract.status != ContractStatus.ACTIVE:
        raise_for_check(await validate_contract_active(
            db, contract.client_id, user.company_id, exclude_contract_id=contract.id
        ))

    start = updates.get("start_date", contract.start_date)
    end = updates.get("end_date", contract.end_date)
    if start and end and end < start:
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")

    before = {key: getattr(contract, key) for key in updates}
    for key, value in updates.items():
        setattr(contract, key, value)
    await db.flush()
    log_audit_action(
        db, "contract_updated", "contract", contract.id, user.company_id, user.id,
        before=before, after=data.model_dump(mode="json", exclude_unset=True),
    )
    return contract


@router.delete("/{contract_id}", status_code=204)
async def delete_contract(contract_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    contract = await _get_company_contract(db, contract_id, user.company_id)
    log_audit_action(
        db, "contract_deleted", "contract", contract.id, user.company_id, user.id,
        before={"contract_number": contract.contract_number},
    )
    await db.delete(contract)
