# backend/classroom_scheduler/api/dependencies/auth.py
"""
Acting-user resolution.

There is no authentication layer. Callers identify themselves with the
``X-User-Email`` header; without it the configured default acting user
is used, if that user exists.
"""

import logging
from typing import Optional

from fastapi import Depends, Header

from ...core.config import settings
from ...core.exceptions import NotFoundException, UnauthorizedException
from ...models.user import User
from ...services.user_service import UserService
from .services import get_user_service

logger = logging.getLogger(__name__)

ACTING_USER_HEADER = "X-User-Email"


def get_acting_user(
    x_user_email: Optional[str] = Header(default=None, alias=ACTING_USER_HEADER),
    user_service: UserService = Depends(get_user_service),
) -> Optional[User]:
    """
    Resolve the user performing the request.

    Raises:
        HTTPException: 401 if the header names an unknown user
    """
    if x_user_email:
        user = user_service.find_by_email(x_user_email.strip())
        if user is None:
            logger.warning(f"Rejected request from unknown acting user {x_user_email}")
            raise UnauthorizedException(f"Unknown acting user: {x_user_email}").to_http_exception()
        return user

    if settings.default_acting_user_email:
        return user_service.find_by_email(settings.default_acting_user_email)

    return None


def require_acting_user(acting_user: Optional[User] = Depends(get_acting_user)) -> User:
    """Like ``get_acting_user`` but fails with 404 when nobody can be resolved."""
    if acting_user is None:
        raise NotFoundException("Acting user not found").to_http_exception()
    return acting_user


__all__ = ["ACTING_USER_HEADER", "get_acting_user", "require_acting_user"]
