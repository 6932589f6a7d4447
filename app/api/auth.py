"""
Routes d'authentification / Authentication routes.
Login, refresh token, profil utilisateur.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.config import settings
from app.database import get_db
from app.models.company import Company
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.auth import LoginRequest, RefreshRequest, TokenResponse
from app.schemas.user import UserMe
from app.services.audit_service import log_audit_action
from app.utils.auth import create_access_token, create_refresh_token, decode_token, verify_password

router = APIRouter()


def _client_ip(request: Request) -> str:
    """Extraire l'IP client / Extract client IP (supports X-Forwarded-For behind proxy)."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Connexion par identifiants / Login with credentials."""
    result = await db.execute(select(User).where(User.username == data.username))
    user = result.scalar_one_or_none()
    ip = _client_ip(request)

    if user is None or not verify_password(data.password, user.hashed_password):
        # Journal de tentative échouée / Log failed login attempt
        log_audit_action(
            db, "LOGIN_FAILED", "auth", user.id if user else 0,
            company_id=user.company_id if user else None, user_id=None,
            after={"username": data.username, "ip": ip},
        )
        await db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not user.is_active:
        log_audit_action(
            db, "LOGIN_DISABLED", "auth", user.id,
            company_id=user.company_id, user_id=user.id, after={"ip": ip},
        )
        await db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account disabled")

    log_audit_action(db, "LOGIN", "auth", user.id, company_id=user.company_id, user_id=user.id, after={"ip": ip})

    return TokenResponse(
        access_token=create_access_token(user.id, user.company_id),
        refresh_token=create_refresh_token(user.id, user.company_id),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(data: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Rafraîchir les tokens / Refresh tokens."""
    payload = decode_token(data.refresh_token)
    if payload is None or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await db.get(User, int(payload["sub"]))
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return TokenResponse(
        access_token=create_access_token(user.id, user.company_id),
        refresh_token=create_refresh_token(user.id, user.company_id),
    )


@router.get("/me", response_model=UserMe)
async def me(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Profil de l'utilisateur connecté / Current user profile."""
    company = await db.get(Company, user.company_id)
    return UserMe(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        company_id=user.company_id,
        company_name=company.name,
        company_timezone=company.timezone,
    )
