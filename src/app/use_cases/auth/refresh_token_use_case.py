"""
Refresh Token Use Case

Handles token refresh with refresh token rotation.
"""

import hmac
import logging
from typing import Optional
from uuid import UUID

from src.app.repositories.user_repository import StorageError
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse, TokenPair

logger = logging.getLogger(__name__)

TOKEN_MISMATCH = Error("TOKEN_MISMATCH", "Invalid refresh token")


class RefreshTokenUseCase:
    """
    Use case for exchanging a refresh token for a new token pair.

    Business Rules:
    - Signature, kind and expiry are checked first (stateless step)
    - The presented token must equal the token stored on the user
      (revocation step); superseded and logged-out tokens fail here
    - Rotation: the stored token is replaced with a compare-and-set, so of
      two concurrent refreshes with the same token only one succeeds
    """

    def __init__(self, uow: UnitOfWork, token_issuer: ITokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, refresh_token: Optional[str]) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(Error("MISSING_TOKEN", "Refresh token is required"))

        decoded = self.token_issuer.decode_refresh_token(refresh_token)
        if decoded.is_err():
            logger.info(f"Token refresh rejected: {decoded.error.code}")
            if decoded.error.code == "TOKEN_EXPIRED":
                return Return.err(
                    Error("TOKEN_EXPIRED", "Refresh token has expired")
                )
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        claims = decoded.value
        try:
            user_id = UUID(claims.sub)
        except ValueError:
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)

                if user is None or not user.is_active:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                if not user.refresh_token or not hmac.compare_digest(
                    user.refresh_token.encode(), refresh_token.encode()
                ):
                    logger.warning(f"Refresh token mismatch for user: {user.email}")
                    return Return.err(TOKEN_MISMATCH)

                new_access_token = self.token_issuer.issue_access_token(user)
                new_refresh_token = self.token_issuer.issue_refresh_token(user)

                swapped = await self.uow.users.swap_refresh_token(
                    user.id, refresh_token, new_refresh_token
                )
                if not swapped:
                    logger.warning(f"Concurrent refresh lost the race for user: {user.email}")
                    return Return.err(TOKEN_MISMATCH)

                await self.uow.commit()
        except StorageError as exc:
            logger.error(f"Token refresh storage failure: {exc}")
            return Return.err(Error("STORAGE_FAILURE", "Token refresh failed"))

        logger.info(f"Token refreshed for user: {user.email}")
        return Return.ok(
            RefreshTokenResponse(
                data=TokenPair(
                    access_token=new_access_token,
                    refresh_token=new_refresh_token,
                )
            )
        )
