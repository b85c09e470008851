"""
CMS Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role granted to a user account"""

    admin = "admin"
    user = "user"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]
