from abc import ABC, abstractmethod
from typing import Any


class IPasswordHasher(ABC):
    """Password hashing interface - application layer"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plain-text password with a fresh random salt"""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if password matches; False for mismatches and malformed hashes"""
        pass

    @abstractmethod
    def looks_like_hash(self, value: Any) -> bool:
        """Cheap structural check telling hashed from plain-text values"""
        pass
