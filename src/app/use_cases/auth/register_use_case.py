"""
Register Use Case

Creates a new CMS account with a hashed password.
"""

import logging

from src.app.repositories.user_repository import StorageError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole, normalize_email
from src.libs.result import Error, Result, Return
from .dtos import RegisterCommand, UserPublic

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Email and password are required
    - Role defaults to "user" and must belong to UserRole
    - Email must be unique (case-insensitive)
    - Password stored as Argon2id hash
    - Registration does not start a session (no refresh token stored)
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, command: RegisterCommand) -> Result[UserPublic]:
        """
        Execute register use case.

        Args:
            command: RegisterCommand with email, password and optional role

        Returns:
            Result[UserPublic], or Error(MISSING_FIELDS | INVALID_ROLE |
            DUPLICATE_EMAIL | STORAGE_FAILURE)
        """
        if not command.email or not command.password:
            logger.info("Registration failed: missing email or password")
            return Return.err(
                Error("MISSING_FIELDS", "Email and password are required")
            )

        role = UserRole.user
        if command.role:
            try:
                role = UserRole(command.role)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {command.role}. Must be one of: "
                        + ", ".join(UserRole.values()),
                    )
                )

        email = normalize_email(command.email)

        try:
            async with self.uow:
                existing_user = await self.uow.users.get_by_email(email)
                if existing_user:
                    logger.info(f"Registration failed: email already registered {email}")
                    return Return.err(
                        Error("DUPLICATE_EMAIL", "User with this email already exists")
                    )

                user = User(
                    email=email,
                    password_hash=self.password_hasher.hash(command.password),
                    role=role,
                )
                user = await self.uow.users.create(user)

                await self.uow.commit()
        except StorageError as exc:
            logger.error(f"Registration storage failure for {email}: {exc}")
            return Return.err(Error("STORAGE_FAILURE", "Registration failed"))

        logger.info(f"New user registered: {email} with role: {role.value}")
        return Return.ok(UserPublic.from_user(user))
