"""
Seed initial / Initial seeding.
Crée une entreprise et son compte admin au premier démarrage si aucun utilisateur n'existe.
Creates a company and its admin account on first startup if no users exist.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.company import Company
from app.models.user import User, UserRole
from app.utils.auth import hash_password

logger = logging.getLogger(__name__)


async def seed_admin(session: AsyncSession) -> None:
    """Créer entreprise + admin si aucun utilisateur n'existe / Create company + admin if no users exist."""
    count = await session.scalar(select(func.count(User.id)))

    if count == 0:
        company = Company(name=settings.SEED_COMPANY_NAME, timezone=settings.DEFAULT_COMPANY_TIMEZONE)
        session.add(company)
        await session.flush()
        session.add(User(
            company_id=company.id,
            username="admin",
            email="admin@clarity-clean.app",
            first_name="Admin",
            hashed_password=hash_password(settings.SEED_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            is_active=True,
        ))
        await session.commit()
        logger.info("Seeded company %r with admin user 'admin'", company.name)
    else:
        logger.info("%s existing user(s), seed skipped", count)
