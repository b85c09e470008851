"""
CMS Auth Domain Entities

All domain entities organized by model.
"""

from .enums import UserRole
from .user import User, normalize_email

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "normalize_email",
]
