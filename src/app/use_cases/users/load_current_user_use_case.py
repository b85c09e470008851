"""
Load Current User Use Case

Loads the live user record for the authenticated subject.
"""

from uuid import UUID

from src.app.repositories.user_repository import StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserPublic
from src.libs.result import Error, Result, Return


class LoadCurrentUserUseCase:
    """
    Use case for GET /auth/me.

    Business Rules:
    - Access token claims provide the user id
    - User must still exist and be active
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserPublic]:
        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)

                if user is None or not user.is_active:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                # Built before the unit of work rolls back and expires the row
                return Return.ok(UserPublic.from_user(user))
        except StorageError:
            return Return.err(
                Error("STORAGE_FAILURE", "Failed to get user information")
            )
