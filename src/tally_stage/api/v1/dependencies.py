"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tally_stage.core.security import InvalidTokenError, decode_subject
from tally_stage.core.settings import settings
from tally_stage.db.session import get_db

# Bearer tokens are optional unless REQUIRE_AUTH is set
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_caller_subject(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Resolve the caller's stable identity from a bearer token.

    Returns:
        The token subject, or None when no token was sent and
        authentication is not required.

    Raises:
        HTTPException: 401 if a token is required but missing, or invalid.
    """
    if credentials is None:
        if settings.require_auth:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return None

    try:
        return decode_subject(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


# Type alias for the optional caller identity
CallerDep = Annotated[str | None, Depends(get_caller_subject)]
