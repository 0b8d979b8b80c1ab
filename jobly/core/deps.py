"""
FastAPI dependencies for authentication and authorization.

Tokens are optional at the transport level: anonymous callers may read
companies and jobs, so the bearer scheme never rejects a request by itself.
The ensure_* dependencies decide what a route requires.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.errors import UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Return the token claims of the caller, or None when no valid token is sent.

    An invalid or expired token is treated the same as no token.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.info("Rejected invalid bearer token")
        return None

    if payload.get("sub") is None:
        return None

    return payload


def ensure_logged_in(user: Optional[dict] = Depends(get_current_user)) -> dict:
    """
    Require a valid token.

    Raises:
        UnauthorizedError: If no valid token was provided
    """
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def ensure_admin(user: Optional[dict] = Depends(get_current_user)) -> dict:
    """
    Require a valid token belonging to an admin.

    Raises:
        UnauthorizedError: If no valid token was provided or the user is not an admin
    """
    if user is None or not user.get("is_admin"):
        raise UnauthorizedError("Unauthorized")
    return user
