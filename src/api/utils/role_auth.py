"""
Role Authorization

Restricts endpoints to a set of user roles on top of bearer authentication.
"""

import logging

from fastapi import Depends, status
from src.libs.result import Error
from src.api.error import ClientError
from src.depends import CurrentUser, get_current_user
from src.domain.entities import UserRole

logger = logging.getLogger(__name__)


def require_roles(*allowed_roles: UserRole):
    """
    Build a dependency that admits only the given roles.

    Missing or invalid tokens are rejected by get_current_user with 401;
    a valid token whose role is not allowed is rejected with 403.

    Usage:
        @router.get("/ping", dependencies=[Depends(require_roles(UserRole.admin))])
    """
    allowed = {UserRole(role).value for role in allowed_roles}

    async def verify_role(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if current_user.role not in allowed:
            logger.info(
                f"Forbidden: role {current_user.role} not in {sorted(allowed)} "
                f"for user {current_user.email}"
            )
            raise ClientError(
                Error("FORBIDDEN", "Forbidden"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return verify_role
