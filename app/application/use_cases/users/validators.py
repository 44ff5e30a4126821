"""Common validation helpers for user use cases."""

from app.domain.entities import ACADEMIC_YEARS, ROLES
from app.domain.errors import InvalidSpecError


def ensure_valid_role(role: str) -> str:
    """Return the normalized role or raise ``InvalidSpecError``."""

    normalized = role.strip().lower()
    if normalized not in ROLES:
        raise InvalidSpecError(f"Unknown role '{role}'")
    return normalized


def ensure_valid_year(year: str) -> str:
    normalized = year.strip()
    if normalized not in ACADEMIC_YEARS:
        raise InvalidSpecError(f"Unknown academic year '{year}'")
    return normalized


def normalize_email(email: str) -> str:
    return email.strip().lower()
