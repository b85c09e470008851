from typing import Any

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHash, VerificationError

from src.app.services.password_hasher import IPasswordHasher

ARGON2_PREFIX = "$argon2"


class Argon2PasswordHasher(IPasswordHasher):
    """Argon2id implementation of the password hasher (argon2-cffi)"""

    def __init__(self, time_cost: int = 3, memory_cost: int = 2**16, parallelism: int = 1):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not isinstance(password, str) or not isinstance(password_hash, str):
            return False
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHash, ValueError):
            return False

    def looks_like_hash(self, value: Any) -> bool:
        return isinstance(value, str) and value.startswith(ARGON2_PREFIX)
