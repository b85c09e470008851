"""
User Use Cases

Read access to the authenticated user's record.
"""

from .load_current_user_use_case import LoadCurrentUserUseCase

__all__ = [
    "LoadCurrentUserUseCase",
]
