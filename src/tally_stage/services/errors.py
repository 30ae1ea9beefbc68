"""Exceptions raised by the service layer."""
from __future__ import annotations

from tally_stage.schemas.common import IDENTITY_MAX_LENGTH


class TallyError(Exception):
    """Base class for service-level failures."""


class InvalidIdentityError(TallyError, ValueError):
    """An identity was empty, blank or too long. Raised before any mutation."""


class ResetNotAllowedError(TallyError, PermissionError):
    """The caller is not allowed to reset the counters."""


def normalize_identity(value: str | None, *, field: str = "identity") -> str:
    """Return ``value`` stripped of surrounding whitespace.

    Raises:
        InvalidIdentityError: If nothing is left or the result is too long.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidIdentityError(f"{field} must not be empty")
    if len(cleaned) > IDENTITY_MAX_LENGTH:
        raise InvalidIdentityError(f"{field} must be at most {IDENTITY_MAX_LENGTH} characters")
    return cleaned
