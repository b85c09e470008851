import logging
from functools import lru_cache
from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.argon2_password_hasher import Argon2PasswordHasher
from src.adapter.services.jwt_token_issuer import JwtTokenIssuer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_issuer import ITokenIssuer
from src.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Acting user resolved from access token claims"""

    id: UUID
    email: str
    role: str


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return Argon2PasswordHasher(
        time_cost=ApplicationConfig.ARGON2_TIME_COST,
        memory_cost=ApplicationConfig.ARGON2_MEMORY_COST,
        parallelism=ApplicationConfig.ARGON2_PARALLELISM,
    )


@lru_cache
def get_token_issuer() -> ITokenIssuer:
    return JwtTokenIssuer(
        access_secret=ApplicationConfig.ACCESS_TOKEN_SECRET,
        refresh_secret=ApplicationConfig.REFRESH_TOKEN_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        access_ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_ttl=timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
) -> CurrentUser:
    """
    Dependency to extract and verify the access token from Authorization header.

    Stateless: only signature, token kind and expiry are checked.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        CurrentUser built from the token claims (id, email, role)

    Raises:
        ClientError: 401 if the header is missing or the token is invalid or expired
    """
    unauthorized = ClientError(
        Error("UNAUTHORIZED", "Unauthorized"),
        status_code=status.HTTP_401_UNAUTHORIZED,
    )

    if credentials is None:
        logger.info("Rejected request without bearer token")
        raise unauthorized

    result = token_issuer.decode_access_token(credentials.credentials)
    if result.is_err():
        # Expired vs malformed is only distinguished here, never to the client
        if result.error.code == "TOKEN_EXPIRED":
            logger.info("Rejected expired access token")
        else:
            logger.warning("Rejected invalid access token")
        raise unauthorized

    claims = result.value
    try:
        return CurrentUser(id=UUID(claims.sub), email=claims.email, role=claims.role)
    except ValueError:
        logger.warning("Rejected access token with malformed subject")
        raise unauthorized
