"""Champs partagés date/heure / Shared date and time fields."""

from datetime import date
from typing import Annotated

from fastapi import Query
from pydantic import AfterValidator, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"  # YYYY-MM-DD
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"  # HH:MM, 24h


def _real_date(value: str | None) -> str | None:
    # Rejette 2024-02-30 et consorts / Rejects 2024-02-30 and friends
    if value is not None:
        date.fromisoformat(value)
    return value


def reject_null(value):
    """Refuser un null explicite sur un champ obligatoire / Refuse an explicit null on a required field."""
    if value is None:
        raise ValueError("may not be null")
    return value


DateStr = Annotated[str, Field(pattern=DATE_PATTERN, examples=["2024-06-01"]), AfterValidator(_real_date)]
TimeStr = Annotated[str, Field(pattern=TIME_PATTERN, examples=["09:00"])]

# Paramètres de requête / Query parameters
DateQuery = Annotated[str, Query(pattern=DATE_PATTERN), AfterValidator(_real_date)]
OptionalDateQuery = Annotated[str | None, Query(pattern=DATE_PATTERN), AfterValidator(_real_date)]
