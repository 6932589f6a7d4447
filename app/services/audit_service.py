"""Journal d'activité / Activity log helper."""

import json
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit import AuditLog


def log_audit_action(
    db: AsyncSession,
    action: str,
    entity_type: str,
    entity_id: int,
    company_id: int | None,
    user_id: int | None,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
    description: str | None = None,
) -> AuditLog:
    """Ajouter une entrée d'audit à la transaction courante / Add an audit entry to the current transaction.

    Écrite avec la mutation : si la transaction échoue, l'entrée disparaît aussi.
    Written alongside the mutation: if the transaction fails, so does the entry.
    """
    details = {k: v for k, v in (("before", before), ("after", after), ("description", description)) if v is not None}
    entry = AuditLog(
        company_id=company_id,
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=json.dumps(details, default=str) if details else None,
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )
    db.add(entry)
    return entry
