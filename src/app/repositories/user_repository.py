from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class StorageError(Exception):
    """Raised by repository adapters when the persistence layer fails"""


class IUserRepository(ABC):
    """User repository interface (credential store) - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalised) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def swap_refresh_token(
        self, user_id: UUID, expected: Optional[str], new: Optional[str]
    ) -> bool:
        """
        Compare-and-set the stored refresh token.

        Writes ``new`` only if the stored token still equals ``expected``.
        Returns True if the row was updated.
        """
        pass
