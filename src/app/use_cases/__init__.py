"""
Use Cases

Organized into domain folders:
- auth/: Session lifecycle (register, login, refresh, logout)
- users/: Current user lookup
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
)
from .users import (
    LoadCurrentUserUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # Users
    "LoadCurrentUserUseCase",
]
