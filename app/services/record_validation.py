"""
Validations des enregistrements / Record validations.
Doublons clients et utilisateurs, suppression de client, complétion de job.
Client and user duplicates, client deletion, job completion.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client
from app.models.contract import Contract
from app.models.job import Job, JobStatus
from app.models.user import User
from app.services.results import VALID, CheckResult, Err, Ok, ValidationResult, invalid

logger = logging.getLogger(__name__)


def can_complete_job(job: Job) -> ValidationResult:
    """Un job terminé ne peut plus être modifié / A completed job can no longer be modified."""
    if job.status == JobStatus.COMPLETED or job.completed_at:
        return ValidationResult(is_valid=False, message="This job has already been completed. Cannot modify.")
    if job.status == JobStatus.CANCELLED:
        return ValidationResult(is_valid=False, message="This job was cancelled and cannot be completed.")
    return VALID


async def validate_client_duplicate(
    db: AsyncSession,
    name: str,
    company_id: int,
    email: str | None = None,
    phone: str | None = None,
    exclude_client_id: int | None = None,
) -> CheckResult[ValidationResult]:
    """Doublon par email, ou par nom + téléphone / Duplicate by email, or by name + phone."""
    base = select(Client).where(Client.company_id == company_id)
    if exclude_client_id is not None:
        base = base.where(Client.id != exclude_client_id)

    try:
        if email:
            match = (await db.execute(base.where(func.lower(Client.email) == email.lower()).limit(1))).scalar_one_or_none()
            if match:
                return invalid(f"A client with this email already exists: {match.name}")

        if name and phone:
            match = (await db.execute(
                base.where(Client.name == name, Client.phone == phone).limit(1)
            )).scalar_one_or_none()
            if match:
                return invalid("A client with this name and phone already exists.")
    except SQLAlchemyError:
        logger.exception("Client duplicate lookup failed (company %s)", company_id)
        return Err("Could not check for duplicate clients")

    return Ok(VALID)


async def can_delete_client(
    db: AsyncSession, client_id: int, company_id: int
) -> CheckResult[ValidationResult]:
    """Un client avec historique ne peut être que désactivé / A client with history may only be deactivated."""
    try:
        job_count = await db.scalar(
            select(func.count(Job.id)).where(Job.client_id == client_id, Job.company_id == company_id)
        ) or 0
        contract_count = await db.scalar(
            select(func.count(Contract.id)).where(Contract.client_id == client_id, Contract.company_id == company_id)
        ) or 0
    except SQLAlchemyError:
        logger.exception("Client history lookup failed for client %s (company %s)", client_id, company_id)
        return Err("Could not check client history")

    if job_count + contract_count > 0:
        return invalid("This client has jobs or contracts history. Only deactivation is allowed.")
    return Ok(VALID)


async def validate_user_email_duplicate(
    db: AsyncSession, email: str, company_id: int, exclude_user_id: int | None = None
) -> CheckResult[ValidationResult]:
    query = select(User).where(User.company_id == company_id, func.lower(User.email) == email.lower())
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    try:
        existing = (await db.execute(query.limit(1))).scalar_one_or_none()
    except SQLAlchemyError:
        logger.exception("User email lookup failed (company %s)", company_id)
        return Err("Could not check for duplicate users")

    if existing:
        return invalid(f"A user with this email already exists: {existing.full_name or 'Existing user'}")
    return Ok(VALID)
