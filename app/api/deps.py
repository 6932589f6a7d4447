"""
Dépendances d'authentification et d'autorisation / Authentication and authorization dependencies.
Injectées dans les routes via Depends().
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User, UserRole
from app.services.results import CheckResult, Err, ValidationResult
from app.utils.auth import decode_token

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extraire et valider l'utilisateur depuis le JWT / Extract and validate user from JWT."""
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user_id = int(payload["sub"])
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return user


def require_role(*roles: UserRole):
    """Factory de dépendance qui vérifie le rôle / Dependency factory that checks the role.

    L'admin passe toujours / Admins always pass.
    """

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role == UserRole.ADMIN or user.role in roles:
            return user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role required: {', '.join(r.value for r in roles) or 'admin'}",
        )

    return _check


require_admin = require_role()
require_staff = require_role(UserRole.MANAGER)


def raise_for_check(check: CheckResult[ValidationResult]) -> None:
    """Traduire un résultat de validation en HTTP / Translate a validation result to HTTP.

    Err -> 503 (lecture en échec, refus), refus métier -> 409.
    Err -> 503 (read failed, rejected), business rejection -> 409.
    """
    if isinstance(check, Err):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{check.reason}. Please try again.",
        )
    if not check.value.is_valid:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=check.value.message)
