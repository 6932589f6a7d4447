"""Routes API / API routes."""

from fastapi import APIRouter

from app.api import (
    auth,
    users,
    clients,
    contracts,
    jobs,
    schedule,
    absences,
    availability,
    audit,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
api_router.include_router(absences.router, prefix="/absences", tags=["absences"])
api_router.include_router(availability.router, prefix="/availability", tags=["availability"])
api_router.include_router(audit.router, prefix="/audit", tags=["audit"])
