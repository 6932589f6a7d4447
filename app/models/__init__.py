"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que create_all les détecte.
Import all models here so create_all can detect them.
"""

from app.models.company import Company
from app.models.user import User, UserRole
from app.models.client import Client
from app.models.contract import Contract, ContractStatus
from app.models.job import Job, JobStatus
from app.models.absence_request import AbsenceRequest, AbsenceStatus, AbsenceType
from app.models.cleaner_availability import CleanerAvailability
from app.models.audit import AuditLog

__all__ = [
    "Company",
    "User",
    "UserRole",
    "Client",
    "Contract",
    "ContractStatus",
    "Job",
    "JobStatus",
    "AbsenceRequest",
    "AbsenceStatus",
    "AbsenceType",
    "CleanerAvailability",
    "AuditLog",
]
