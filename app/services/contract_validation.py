"""
Validité des contrats / Contract validity checks.

Un client n'est planifiable que s'il a au moins un contrat "active" dont la
période couvre aujourd'hui (date de début passée ou absente, date de fin
future ou absente). "Aujourd'hui" est évalué dans le fuseau de l'entreprise.
A client is schedulable only with at least one "active" contract whose period
covers today (start date reached or missing, end date not passed or missing).
"Today" is evaluated in the company timezone.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.company import Company
from app.models.contract import Contract, ContractStatus
from app.services.results import VALID, CheckResult, Err, Ok, ValidationResult, invalid

logger = logging.getLogger(__name__)


def _covers(contract: Contract, today: str) -> bool:
    started = contract.start_date is None or contract.start_date <= today
    not_ended = contract.end_date is None or contract.end_date >= today
    return started and not_ended


async def company_today(db: AsyncSession, company_id: int) -> str:
    """Date du jour dans le fuseau de l'entreprise / Today's date in the company timezone."""
    company = await db.get(Company, company_id)
    tz_name = company.timezone if company and company.timezone else settings.DEFAULT_COMPANY_TIMEZONE
    try:
        tz = ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone %r for company %s, using default", tz_name, company_id)
        tz = ZoneInfo(settings.DEFAULT_COMPANY_TIMEZONE)
    return datetime.now(tz).date().isoformat()


async def _active_contracts(
    db: AsyncSession, client_id: int, company_id: int, exclude_contract_id: int | None = None
) -> list[Contract]:
    query = select(Contract).where(
        Contract.client_id == client_id,
        Contract.company_id == company_id,
        Contract.status == ContractStatus.ACTIVE,
    )
    if exclude_contract_id is not None:
        query = query.where(Contract.id != exclude_contract_id)
    result = await db.execute(query.order_by(Contract.id))
    return list(result.scalars().all())


async def can_schedule_for_client(
    db: AsyncSession, client_id: int, company_id: int, today: str | None = None
) -> CheckResult[ValidationResult]:
    """Le client a-t-il un contrat valide ? / Does the client hold a currently valid contract?"""
    try:
        if today is None:
            today = await company_today(db, company_id)
        contracts = await _active_contracts(db, client_id, company_id)
    except SQLAlchemyError:
        logger.exception("Contract lookup failed for client %s (company %s)", client_id, company_id)
        return Err("Could not load client contracts")

    if not contracts:
        return invalid(
            "This client has no active contract. Create or activate a contract before scheduling jobs."
        )

    if any(_covers(c, today) for c in contracts):
        return Ok(VALID)

    if all(c.end_date is not None and c.end_date < today for c in contracts):
        return invalid(
            "This client's contract has expired. Renew the contract before scheduling new jobs."
        )

    next_start = min(c.start_date for c in contracts if c.start_date and c.start_date > today)
    return invalid(f"This client's contract only starts on {next_start}.")


async def get_active_contract_for_client(
    db: AsyncSession, client_id: int, company_id: int, today: str | None = None
) -> CheckResult[int | None]:
    """ID du premier contrat actif et en cours / ID of the first active, in-period contract."""
    try:
        if today is None:
            today = await company_today(db, company_id)
        contracts = await _active_contracts(db, client_id, company_id)
    except SQLAlchemyError:
        logger.exception("Contract lookup failed for client %s (company %s)", client_id, company_id)
        return Err("Could not load client contracts")

    valid = next((c for c in contracts if _covers(c, today)), None)
    return Ok(valid.id if valid else None)


async def validate_contract_active(
    db: AsyncSession, client_id: int, company_id: int, exclude_contract_id: int | None = None
) -> CheckResult[ValidationResult]:
    """Un seul contrat actif par client / Only one active contract per client."""
    try:
        contracts = await _active_contracts(db, client_id, company_id, exclude_contract_id)
    except SQLAlchemyError:
        logger.exception("Contract lookup failed for client %s (company %s)", client_id, company_id)
        return Err("Could not load client contracts")

    if contracts:
        return invalid(
            f"This client already has an active contract ({contracts[0].contract_number}). "
            "Only 1 active contract per client is allowed."
        )
    return Ok(VALID)
