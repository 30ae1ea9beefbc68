"""Bearer token helpers for the authenticated deployment variant."""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt

from tally_stage.core.settings import settings
from tally_stage.db.time import utcnow


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be decoded into a subject."""


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose ``sub`` claim is the caller's stable identity."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> str:
    """Return the ``sub`` claim of a valid token.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise InvalidTokenError("Token has no subject")
    return subject
