"""
Types de résultat des validations / Validation result types.

Ok(decision) : la vérification a pu conclure (valide ou non).
Err(reason)  : la vérification n'a pas pu conclure (lecture en échec).
Ok(decision): the check reached a decision (valid or not).
Err(reason):  the check could not decide (a read failed).

Les appelants ne doivent jamais traiter Err comme "pas de conflit".
Callers must never treat Err as "no conflict".
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str | None = None


@dataclass(frozen=True)
class BlockDecision:
    can_create: bool
    message: str | None = None


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    reason: str


CheckResult = Union[Ok[T], Err]

VALID = ValidationResult(is_valid=True)


def invalid(message: str) -> Ok[ValidationResult]:
    """Raccourci pour une décision de refus / Shortcut for a rejecting decision."""
    return Ok(ValidationResult(is_valid=False, message=message))
