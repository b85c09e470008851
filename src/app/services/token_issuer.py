from abc import ABC, abstractmethod

from pydantic import BaseModel

from src.domain.entities import User
from src.libs.result import Result


class TokenClaims(BaseModel):
    """Identity claims carried by access and refresh tokens"""

    sub: str
    email: str
    role: str


class ITokenIssuer(ABC):
    """
    Token issuing interface - application layer

    Access and refresh tokens are signed with different secrets.
    Decoding only checks signature, kind and expiry; revocation of refresh
    tokens is enforced by comparing against the stored token.
    """

    @abstractmethod
    def issue_access_token(self, user: User) -> str:
        pass

    @abstractmethod
    def issue_refresh_token(self, user: User) -> str:
        pass

    @abstractmethod
    def decode_access_token(self, token: str) -> Result[TokenClaims]:
        """Errors: TOKEN_EXPIRED, INVALID_TOKEN"""
        pass

    @abstractmethod
    def decode_refresh_token(self, token: str) -> Result[TokenClaims]:
        """Errors: TOKEN_EXPIRED, INVALID_TOKEN"""
        pass
