"""
CRUD Utilisateurs / User CRUD routes.
Réservé aux admins, limité à l'entreprise courante / Admins only, scoped to the current company.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import raise_for_check, require_admin, require_staff
from app.database import get_db
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.audit_service import log_audit_action
from app.services.record_validation import validate_user_email_duplicate
from app.utils.auth import hash_password

router = APIRouter()


async def _get_company_user(db: AsyncSession, user_id: int, company_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id, User.company_id == company_id))
    target = result.scalar_one_or_none()
    if not target:
        raise HTTPException(status_code=404, detail="User not found")
    return target


async def get_company_cleaner(db: AsyncSession, cleaner_id: int, company_id: int) -> User:
    """Cleaner actif de l'entreprise / Active cleaner of the company.

    Seuls les utilisateurs de rôle cleaner reçoivent des jobs.
    Only users with the cleaner role are assigned jobs.
    """
    result = await db.execute(
        select(User).where(
            User.id == cleaner_id,
            User.company_id == company_id,
            User.role == UserRole.CLEANER,
            User.is_active.is_(True),
        )
    )
    cleaner = result.scalar_one_or_none()
    if not cleaner:
        raise HTTPException(status_code=404, detail="Cleaner not found")
    return cleaner


@router.get("/", response_model=list[UserRead])
async def list_users(
    role: UserRole | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    """Lister les utilisateurs de l'entreprise / List company users (managers need the cleaner list)."""
    query = select(User).where(User.company_id == user.company_id).order_by(User.username)
    if role is not None:
        query = query.where(User.role == role)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
):
    return await _get_company_user(db, user_id, user.company_id)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Créer un utilisateur / Create a user."""
    existing = await db.execute(select(User).where(User.username == data.username))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Username already exists")
    raise_for_check(await validate_user_email_duplicate(db, data.email, user.company_id))

    new_user = User(
        company_id=user.company_id,
        username=data.username,
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        hashed_password=hash_password(data.password),
        role=data.role,
        is_active=data.is_active,
    )
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)
    log_audit_action(
        db, "user_created", "user", new_user.id, user.company_id, user.id,
        after={"username": new_user.username, "role": new_user.role.value},
    )
    return new_user


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Modifier un utilisateur / Update a user."""
    target = await _get_company_user(db, user_id, user.company_id)

    if data.email is not None and data.email.lower() != target.email.lower():
        raise_for_check(await validate_user_email_duplicate(db, data.email, user.company_id, exclude_user_id=target.id))

    before = {"email": target.email, "role": target.role.value, "is_active": target.is_active}
    updates = data.model_dump(exclude_unset=True, exclude={"password"})
    for key, value in updates.items():
        setattr(target, key, value)
    if data.password is not None:
        target.hashed_password = hash_password(data.password)

    await db.flush()
    await db.refresh(target)
    log_audit_action(
        db, "user_updated", "user", target.id, user.company_id, user.id,
        before=before, after={"email": target.email, "role": target.role.value, "is_active": target.is_active},
    )
    return target


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Supprimer un utilisateur (et ses jobs) / Delete a user (and their jobs)."""
    target = await _get_company_user(db, user_id, user.company_id)
    if target.id == user.id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    log_audit_action(db, "user_deleted", "user", target.id, user.company_id, user.id, before={"username": target.username})
    await db.delete(target)
