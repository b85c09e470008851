"""
Login Use Case

Verifies credentials and starts a session by issuing a token pair.
"""

import logging
from datetime import datetime

from src.app.repositories.user_repository import StorageError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import normalize_email
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Email or password is incorrect")


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email, wrong password and inactive account share one error
    - A password hash is computed even when the user is unknown, so timing
      does not reveal whether the account exists
    - The new refresh token replaces any stored one (single session per user)
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        token_issuer: ITokenIssuer,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse (user fields and token pair), or Error
        """
        if not email or not password:
            logger.info("Login failed: missing email or password")
            return Return.err(
                Error("VALIDATION_ERROR", "Email and password are required")
            )

        email = normalize_email(email)
        logger.info(f"Login attempt for email: {email}")

        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)

                if user is None:
                    self.password_hasher.hash(password)
                    logger.info(f"Failed login attempt for email: {email}")
                    return Return.err(INVALID_CREDENTIALS)

                if not self.password_hasher.verify(password, user.password_hash):
                    logger.info(f"Failed login attempt for email: {email}")
                    return Return.err(INVALID_CREDENTIALS)

                if not user.is_active:
                    logger.info(f"Login rejected for inactive account: {email}")
                    return Return.err(INVALID_CREDENTIALS)

                access_token = self.token_issuer.issue_access_token(user)
                refresh_token = self.token_issuer.issue_refresh_token(user)

                # Overwrites any previous refresh token
                user.refresh_token = refresh_token
                user.last_login_at = datetime.utcnow()
                user = await self.uow.users.update(user)

                await self.uow.commit()
        except StorageError as exc:
            logger.error(f"Login storage failure for {email}: {exc}")
            return Return.err(Error("STORAGE_FAILURE", "Login failed"))

        public = UserPublic.from_user(user)
        logger.info(f"User {email} logged in successfully with role: {public.role}")
        return Return.ok(
            LoginResponse(
                **public.model_dump(),
                access_token=access_token,
                refresh_token=refresh_token,
            )
        )
