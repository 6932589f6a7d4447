"""Routes Clients / Client API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, raise_for_check, require_staff
from app.database import get_db
from app.models.client import Client
from app.models.user import User
from app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.services.audit_service import log_audit_action
from app.services.record_validation import can_delete_client, validate_client_duplicate

router = APIRouter()


async def get_company_client(db: AsyncSession, client_id: int, company_id: int) -> Client:
    result = await db.execute(select(Client).where(Client.id == client_id, Client.company_id == company_id))
    client = result.scalar_one_or_none()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("/", response_model=list[ClientRead])
async def list_clients(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = select(Client).where(Client.company_id == user.company_id).order_by(Client.name)
    if not include_inactive:
        query = query.where(Client.is_active.is_(True))
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(client_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    return await get_company_client(db, client_id, user.company_id)


@router.post("/", response_model=ClientRead, status_code=201)
async def create_client(data: ClientCreate, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    raise_for_check(await validate_client_duplicate(
        db, data.name, user.company_id, email=data.email, phone=data.phone,
    ))
    client = Client(company_id=user.company_id, **data.model_dump())
    db.add(client)
    await db.flush()
    log_audit_action(db, "client_created", "client", client.id, user.company_id, user.id, after=data.model_dump())
    return client


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    client = await get_company_client(db, client_id, user.company_id)
    updates = data.model_dump(exclude_unset=True)

    if {"name", "email", "phone"} & updates.keys():
        raise_for_check(await validate_client_duplicate(
            db,
            updates.get("name") or client.name,
            user.company_id,
            email=updates.get("email", client.email),
            phone=updates.get("phone", client.phone),
            exclude_client_id=client.id,
        ))

    before = {key: getattr(client, key) for key in updates}
    for key, value in updates.items():
        setattr(client, key, value)
    await db.flush()
    log_audit_action(db, "client_updated", "client", client.id, user.company_id, user.id, before=before, after=updates)
    return client


@router.delete("/{client_id}", status_code=204)
async def delete_client(client_id: int, db: AsyncSession = Depends(get_db), user: User = Depends(require_staff)):
    """Supprimer un client sans historique / Delete a client without history.

    Avec jobs ou contrats : 409, seule la désactivation est permise.
    With jobs or contracts: 409, only deactivation is allowed.
    """
    client = await get_company_client(db, client_id, user.company_id)
    raise_for_check(await can_delete_client(db, client.id, user.company_id))
    log_audit_action(db, "client_deleted", "client", client.id, user.company_id, user.id, before={"name": client.name})
    await db.delete(client)
