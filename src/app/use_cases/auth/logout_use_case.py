"""
Logout Use Case

Ends the user's session by clearing the stored refresh token.
"""

import logging
from typing import Optional

from src.app.repositories.user_repository import StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import normalize_email
from src.libs.result import Error, Result, Return
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)

LOGGED_OUT_MESSAGE = "User logged out successfully."


class LogoutUseCase:
    """
    Use case for logout.

    Security:
        - Same response for known and unknown emails (no enumeration)
        - Idempotent: a user without a session still gets success
        - Only a storage failure is reported as an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: Optional[str]) -> Result[LogoutResponse]:
        if not email:
            return Return.ok(LogoutResponse(message=LOGGED_OUT_MESSAGE))

        email = normalize_email(email)

        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)
                if user is not None and user.refresh_token is not None:
                    user.refresh_token = None
                    await self.uow.users.update(user)
                    await self.uow.commit()
                    logger.info(f"User {email} logged out successfully")
        except StorageError as exc:
            logger.error(f"Logout error for {email}: {exc}")
            return Return.err(Error("STORAGE_FAILURE", "Logout failed"))

        return Return.ok(LogoutResponse(message=LOGGED_OUT_MESSAGE))
