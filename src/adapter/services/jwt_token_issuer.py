import uuid
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from src.app.services.token_issuer import ITokenIssuer, TokenClaims
from src.domain.entities import User
from src.libs.result import Error, Result, Return

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JwtTokenIssuer(ITokenIssuer):
    """
    JWT implementation of the token issuer (python-jose, HS256 by default)

    Claims: sub, email, role, type, iat, exp and a random jti so that two
    tokens minted within the same second never collide.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def issue_access_token(self, user: User) -> str:
        return self._encode(user, ACCESS_TOKEN_TYPE, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, user: User) -> str:
        return self._encode(user, REFRESH_TOKEN_TYPE, self.refresh_secret, self.refresh_ttl)

    def decode_access_token(self, token: str) -> Result[TokenClaims]:
        return self._decode(token, ACCESS_TOKEN_TYPE, self.access_secret)

    def decode_refresh_token(self, token: str) -> Result[TokenClaims]:
        return self._decode(token, REFRESH_TOKEN_TYPE, self.refresh_secret)

    def _encode(self, user: User, token_type: str, secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": getattr(user.role, "value", user.role),
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, secret: str) -> Result[TokenClaims]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
        except JWTError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        if payload.get("type") != token_type:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        try:
            claims = TokenClaims(
                sub=payload["sub"], email=payload["email"], role=payload["role"]
            )
        except (KeyError, ValueError):
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        return Return.ok(claims)
