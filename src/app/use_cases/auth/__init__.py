"""
Authentication Use Cases

All session lifecycle business logic: register, login, refresh, logout.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .dtos import (
    RegisterCommand,
    UserPublic,
    LoginResponse,
    TokenPair,
    RefreshTokenResponse,
    LogoutResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "UserPublic",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "TokenPair",
]
