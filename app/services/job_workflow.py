"""
Chaîne de validation d'un job / Job submission check pipeline.

Ordre : absence -> contrat -> chevauchement. Arrêt au premier refus.
Order: block -> contract -> overlap. Stops at the first rejection.

Politique en cas d'échec de lecture : refus (fail-closed). Une vérification
qui n'a pas pu conclure bloque la soumission avec un message distinct.
Read failure policy: reject (fail-closed). A check that could not decide
blocks the submission with a distinct message.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.cleaner_block import validate_job_creation
from app.services.contract_validation import can_schedule_for_client
from app.services.results import Err
from app.services.schedule_validation import JobCandidate, validate_schedule

logger = logging.getLogger(__name__)

STAGE_BLOCK = "block"
STAGE_CONTRACT = "contract"
STAGE_OVERLAP = "overlap"

_STAGE_LABELS = {
    STAGE_BLOCK: "the cleaner's absences",
    STAGE_CONTRACT: "the client's contract",
    STAGE_OVERLAP: "the cleaner's schedule",
}


@dataclass(frozen=True)
class JobCheckOutcome:
    """Résultat de la chaîne / Pipeline outcome.

    error=True : une lecture a échoué, la décision n'a pas pu être prise.
    error=True: a read failed, no decision could be made.
    """
    allowed: bool
    message: str | None = None
    stage: str | None = None
    error: bool = False


def _unverified(stage: str, err: Err) -> JobCheckOutcome:
    logger.warning("Job check '%s' could not complete: %s", stage, err.reason)
    return JobCheckOutcome(
        allowed=False,
        message=f"Could not verify {_STAGE_LABELS[stage]}. The job was not saved, please try again.",
        stage=stage,
        error=True,
    )


async def run_job_checks(db: AsyncSession, candidate: JobCandidate, company_id: int) -> JobCheckOutcome:
    """Exécuter les vérifications dans l'ordre / Run the checks in order."""
    block = await validate_job_creation(db, candidate.cleaner_id, candidate.date, company_id)
    if isinstance(block, Err):
        return _unverified(STAGE_BLOCK, block)
    if not block.value.can_create:
        return JobCheckOutcome(allowed=False, message=block.value.message, stage=STAGE_BLOCK)

    contract = await can_schedule_for_client(db, candidate.client_id, company_id)
    if isinstance(contract, Err):
        return _unverified(STAGE_CONTRACT, contract)
    if not contract.value.is_valid:
        return JobCheckOutcome(allowed=False, message=contract.value.message, stage=STAGE_CONTRACT)

    overlap = await validate_schedule(db, candidate, company_id)
    if isinstance(overlap, Err):
        return _unverified(STAGE_OVERLAP, overlap)
    if not overlap.value.is_valid:
        return JobCheckOutcome(allowed=False, message=overlap.value.message, stage=STAGE_OVERLAP)

    return JobCheckOutcome(allowed=True)
