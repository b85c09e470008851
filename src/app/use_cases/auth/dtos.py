"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
JSON field names are camelCase to match the CMS admin client;
snake_case names are accepted on input as well.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Register command - fields may be missing, the use case validates them"""

    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserPublic(CamelModel):
    """User record as exposed to clients (never includes the password hash)"""

    id: str = Field(alias="_id")
    email: str
    role: str
    created_at: datetime
    last_login_at: Optional[datetime] = None
    is_active: bool

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=str(user.id),
            email=user.email,
            role=getattr(user.role, "value", user.role),
            created_at=user.created_at,
            last_login_at=user.last_login_at,
            is_active=user.is_active,
        )


class LoginResponse(UserPublic):
    """Response for login use case: user fields plus the token pair"""

    access_token: str
    refresh_token: str


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    """Response for refresh token use case"""

    success: bool = True
    data: TokenPair


class LogoutResponse(CamelModel):
    """Response for logout use case"""

    message: str
