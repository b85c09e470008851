from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    UserPublic,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
)
from src.app.use_cases.users import LoadCurrentUserUseCase
from src.depends import (
    CurrentUser,
    get_current_user,
    get_password_hasher,
    get_token_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Fields are optional at the HTTP layer so that a missing email or
    password is reported by the use case as MISSING_FIELDS (400).
    """

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")
    role: Optional[str] = Field(None, description="Role (admin or user), defaults to user")


@router.post("/register", status_code=status.HTTP_200_OK, response_model=UserPublic)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Registration

    Creates a new account. Does not log the user in.

    Raises:
        - 400 Bad Request: Missing fields, invalid role or duplicate email
        - 500 Internal Server Error: Storage failure
    """
    command = RegisterCommand(
        email=request.email, password=request.password, role=request.role
    )

    use_case = RegisterUseCase(uow, password_hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_FIELDS", "INVALID_ROLE", "DUPLICATE_EMAIL"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
):
    """
    User Login

    Verifies credentials, stores a new refresh token and returns the user
    record with an access/refresh token pair.

    Raises:
        - 400 Bad Request: Missing fields or invalid credentials (same error
          for unknown email and wrong password)
        - 500 Internal Server Error: Storage failure
    """
    use_case = LoginUseCase(uow, password_hasher, token_issuer)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_CREDENTIALS"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload (accepts refreshToken or refresh_token)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    refresh_token: Optional[str] = Field(None, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
):
    """
    Refresh Token Pair

    Exchanges a refresh token for a new access/refresh pair (rotation).

    Raises:
        - 401 Unauthorized: Refresh token missing
        - 403 Forbidden: Invalid, expired, superseded or revoked token, or
          unknown user
        - 500 Internal Server Error: Storage failure
    """
    use_case = RefreshTokenUseCase(uow, token_issuer)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "MISSING_TOKEN":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in (
            "INVALID_TOKEN",
            "TOKEN_EXPIRED",
            "USER_NOT_FOUND",
            "TOKEN_MISMATCH",
        ):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class LogoutRequest(BaseModel):
    """Logout HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Optional[LogoutRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Clears the stored refresh token so it can no longer be used.

    Security:
        - No email enumeration (same response for known and unknown emails)

    Returns:
        - 200 OK: Always, unless storage fails
        - 500 Internal Server Error: Storage failure
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(request.email if request else None)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserPublic)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Returns the live record of the user identified by the access token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token, or the user
          no longer exists
        - 500 Internal Server Error: Storage failure
    """
    use_case = LoadCurrentUserUseCase(uow)
    result = await use_case.execute(current_user.id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
