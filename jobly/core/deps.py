"""
FastAPI dependencies for authentication and authorization.

The bearer token is optional on every request: a missing or invalid token
means the caller is anonymous. Route-level gates then decide whether an
anonymous, logged-in, or admin caller may proceed.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.errors import UnauthorizedError
from jobly.core.security import decode_token
from jobly.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Extract the caller from the JWT, if one was sent.

    Returns None for anonymous callers and for tokens that fail to decode.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.info("Ignoring invalid bearer token")
        return None

    username = payload.get("username")
    if username is None:
        return None

    return CurrentUser(username=username, is_admin=bool(payload.get("isAdmin", False)))


async def ensure_logged_in(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """Require any authenticated caller."""
    if user is None:
        raise UnauthorizedError()
    return user


async def ensure_admin(
    user: CurrentUser = Depends(ensure_logged_in),
) -> CurrentUser:
    """Require an authenticated admin."""
    if not user.is_admin:
        raise UnauthorizedError()
    return user


async def ensure_correct_user_or_admin(
    username: str,
    user: CurrentUser = Depends(ensure_logged_in),
) -> CurrentUser:
    """
    Require the caller to be the user named in the path, or an admin.

    `username` is resolved from the route's path parameter of the same name.
    """
    if user.username != username and not user.is_admin:
        raise UnauthorizedError()
    return user
